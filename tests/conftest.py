"""Shared pytest fixtures for etherscan-verify tests."""

import json
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from etherscan_verify.client import VerificationClient

API_URL = "https://api-sepolia.example.com/api"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def build_info_sample(fixtures_dir: Path) -> Path:
    """Return path to sample Hardhat build-info JSON file."""
    return fixtures_dir / "build_info" / "solc-0_8_24-0226551e69b495246b67c792bf5a45612b5cd2f4.json"


@pytest.fixture
def sample_build_info_json(build_info_sample: Path) -> Dict[str, Any]:
    """Load and return the sample build-info fixture."""
    with open(build_info_sample) as f:
        return json.load(f)


@pytest.fixture
def write_build_info(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes build-info data to a temporary file."""

    def _write(data: Any, name: str = "build-info.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def hardhat_project(tmp_path: Path, fixtures_dir: Path, build_info_sample: Path) -> Path:
    """Create a temporary Hardhat project with build info and Ignition output."""
    project = tmp_path / "project"
    build_info_dir = project / "artifacts" / "build-info"
    build_info_dir.mkdir(parents=True)
    shutil.copy(build_info_sample, build_info_dir / build_info_sample.name)

    shutil.copytree(fixtures_dir / "ignition", project / "ignition" / "deployments")
    return project


@pytest.fixture
def sleeps() -> List[float]:
    """Record of delays requested by the client under test."""
    return []


@pytest.fixture
def client(sleeps: List[float]) -> VerificationClient:
    """VerificationClient against the mocked API that never really sleeps."""
    return VerificationClient(API_URL, sleep=sleeps.append)
