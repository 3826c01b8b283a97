"""Build-info artifact reader for etherscan-verify library."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import DEFAULT_OPTIMIZER_RUNS
from .exceptions import ArtifactMalformedError, ArtifactNotFoundError
from .types import BuildArtifact
from .versions import normalize_compiler_version

logger = logging.getLogger(__name__)


def load_build_artifact(path: Union[Path, str]) -> BuildArtifact:
    """
    Load a Hardhat build-info JSON file.

    Args:
        path: Path to build-info file (artifacts/build-info/*.json)

    Returns:
        BuildArtifact with normalized compiler version and optimizer settings

    Raises:
        ArtifactNotFoundError: If path is not a readable file
        ArtifactMalformedError: If content is not JSON, has no "input" object,
            or carries no compiler version
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise ArtifactNotFoundError(f"Build info not found at {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ArtifactMalformedError(f"Build info at {path} is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ArtifactMalformedError(f"Build info at {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ArtifactMalformedError(f"Build info at {path} is not a JSON object")

    source_input = data.get("input")
    if not isinstance(source_input, dict):
        raise ArtifactMalformedError(f"Build info at {path} is missing input object")

    # Prefer long version (carries commit hash), fall back to short version
    version = data.get("solcLongVersion") or data.get("solcVersion")
    if not version or not isinstance(version, str):
        raise ArtifactMalformedError(
            f"Build info at {path} has neither solcLongVersion nor solcVersion"
        )

    settings = source_input.get("settings")
    if not isinstance(settings, dict):
        settings = {}

    optimizer_enabled, optimizer_runs = _extract_optimizer(settings.get("optimizer"))

    evm_version = settings.get("evmVersion")
    if not isinstance(evm_version, str) or not evm_version:
        evm_version = None

    artifact = BuildArtifact(
        source_input=source_input,
        compiler_version=normalize_compiler_version(version),
        optimizer_enabled=optimizer_enabled,
        optimizer_runs=optimizer_runs,
        evm_version=evm_version,
        path=path,
    )
    logger.debug(
        "Loaded build info %s (compiler=%s, optimizer=%s, runs=%s, evm=%s)",
        path,
        artifact.compiler_version,
        artifact.optimizer_enabled,
        artifact.optimizer_runs,
        artifact.evm_version,
    )
    return artifact


def _extract_optimizer(optimizer: Any) -> tuple[bool, str]:
    """
    Extract (enabled, runs) from compiler optimizer settings.

    A runs value only counts when the optimizer is enabled.
    """
    if not isinstance(optimizer, dict) or optimizer.get("enabled") is not True:
        return False, DEFAULT_OPTIMIZER_RUNS

    runs = optimizer.get("runs")
    if runs is None or isinstance(runs, bool) or runs == "" or runs == 0:
        return True, DEFAULT_OPTIMIZER_RUNS

    # JSON numbers like 200.0 should still serialize as "200"
    if isinstance(runs, float) and runs.is_integer():
        runs = int(runs)
    return True, str(runs)


def find_build_info(
    build_info_dir: Union[Path, str], qualified_name: str
) -> Path:
    """
    Locate the build-info file that compiled a given contract.

    Hardhat 3 writes compiler output to *.output.json companions; those are skipped.
    When several builds contain the source, the most recently modified one wins.

    Args:
        build_info_dir: Directory with build-info files (artifacts/build-info)
        qualified_name: Fully-qualified contract name ("<path>:<ContractName>")

    Returns:
        Path to the matching build-info file

    Raises:
        ArtifactNotFoundError: If directory is missing or no build contains the source
    """
    build_info_dir = Path(build_info_dir)
    if not build_info_dir.is_dir():
        raise ArtifactNotFoundError(f"Build info directory not found at {build_info_dir}")

    source_name = qualified_name.rpartition(":")[0] or qualified_name

    best: Optional[Path] = None
    for candidate in build_info_dir.glob("*.json"):
        if candidate.name.endswith(".output.json"):
            continue

        sources = _read_source_names(candidate)
        if source_name not in sources:
            continue

        if best is None or candidate.stat().st_mtime > best.stat().st_mtime:
            best = candidate

    if best is None:
        raise ArtifactNotFoundError(
            f"No build info in {build_info_dir} contains source '{source_name}'"
        )
    return best


def _read_source_names(path: Path) -> Dict[str, Any]:
    """Return input.sources of a build-info file, or {} if unreadable."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Skipping unreadable build info %s", path)
        return {}

    if not isinstance(data, dict) or not isinstance(data.get("input"), dict):
        return {}
    sources = data["input"].get("sources")
    return sources if isinstance(sources, dict) else {}
