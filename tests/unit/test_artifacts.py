"""Unit tests for the build-info artifact reader."""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from etherscan_verify.artifacts import find_build_info, load_build_artifact
from etherscan_verify.exceptions import ArtifactMalformedError, ArtifactNotFoundError


def _build_info(settings: Dict[str, Any], **versions: str) -> Dict[str, Any]:
    data: Dict[str, Any] = {"input": {"language": "Solidity", "settings": settings, "sources": {}}}
    data.update(versions)
    return data


class TestLoadBuildArtifact:
    """Test the load_build_artifact function."""

    def test_loads_complete_build_info(self, build_info_sample: Path, sample_build_info_json):
        """Test loading a Hardhat build-info file with all fields."""
        artifact = load_build_artifact(build_info_sample)

        assert artifact.compiler_version == "v0.8.24+commit.e11b9ed9"
        assert artifact.optimizer_enabled is True
        assert artifact.optimizer_runs == "200"
        assert artifact.evm_version == "cancun"
        assert artifact.source_input == sample_build_info_json["input"]
        assert artifact.source_names == ["project/contracts/KipuBank.sol"]
        assert artifact.path == build_info_sample

    def test_accepts_string_path(self, build_info_sample: Path):
        """Test that path can be given as a string."""
        artifact = load_build_artifact(str(build_info_sample))
        assert artifact.compiler_version.startswith("v")

    def test_prefers_long_version(self, write_build_info: Callable[..., Path]):
        """Test that solcLongVersion wins over solcVersion."""
        path = write_build_info(
            _build_info({}, solcVersion="0.8.24", solcLongVersion="0.8.24+commit.e11b9ed9")
        )
        assert load_build_artifact(path).compiler_version == "v0.8.24+commit.e11b9ed9"

    def test_synthesizes_from_short_version(self, write_build_info: Callable[..., Path]):
        """Test falling back to solcVersion when no long version exists."""
        path = write_build_info(_build_info({}, solcVersion="0.8.24"))
        assert load_build_artifact(path).compiler_version == "v0.8.24"

    def test_keeps_existing_version_marker(self, write_build_info: Callable[..., Path]):
        """Test that a version already prefixed with 'v' is not prefixed again."""
        path = write_build_info(_build_info({}, solcLongVersion="v0.8.20+commit.a1b79de6"))
        assert load_build_artifact(path).compiler_version == "v0.8.20+commit.a1b79de6"

    @pytest.mark.parametrize(
        "optimizer",
        [
            None,
            {"enabled": False, "runs": 1000},
            {"runs": 1000},
            {},
        ],
    )
    def test_disabled_optimizer_ignores_runs(
        self, write_build_info: Callable[..., Path], optimizer
    ):
        """Test that absent or disabled optimizer yields (False, "200")."""
        settings = {} if optimizer is None else {"optimizer": optimizer}
        path = write_build_info(_build_info(settings, solcVersion="0.8.24"))

        artifact = load_build_artifact(path)

        assert artifact.optimizer_enabled is False
        assert artifact.optimizer_runs == "200"

    def test_enabled_optimizer_uses_runs(self, write_build_info: Callable[..., Path]):
        """Test that enabled optimizer reports its runs as a decimal string."""
        path = write_build_info(
            _build_info({"optimizer": {"enabled": True, "runs": 1000}}, solcVersion="0.8.24")
        )

        artifact = load_build_artifact(path)

        assert artifact.optimizer_enabled is True
        assert artifact.optimizer_runs == "1000"

    def test_enabled_optimizer_without_runs_uses_default(
        self, write_build_info: Callable[..., Path]
    ):
        """Test that enabled optimizer with no runs falls back to "200"."""
        path = write_build_info(_build_info({"optimizer": {"enabled": True}}, solcVersion="0.8.24"))
        assert load_build_artifact(path).optimizer_runs == "200"

    def test_missing_evm_version_is_none(self, write_build_info: Callable[..., Path]):
        """Test that absent or empty evmVersion is omitted rather than empty."""
        path = write_build_info(_build_info({"evmVersion": ""}, solcVersion="0.8.24"))
        assert load_build_artifact(path).evm_version is None

    def test_missing_settings_uses_defaults(self, write_build_info: Callable[..., Path]):
        """Test that an input without settings still loads."""
        path = write_build_info({"input": {"sources": {}}, "solcVersion": "0.8.24"})

        artifact = load_build_artifact(path)

        assert artifact.optimizer_enabled is False
        assert artifact.optimizer_runs == "200"
        assert artifact.evm_version is None

    def test_nonexistent_path_raises_not_found(self, tmp_path: Path):
        """Test that a missing file raises ArtifactNotFoundError."""
        with pytest.raises(ArtifactNotFoundError):
            load_build_artifact(tmp_path / "does_not_exist.json")

    def test_directory_raises_not_found(self, tmp_path: Path):
        """Test that a directory path raises ArtifactNotFoundError."""
        with pytest.raises(ArtifactNotFoundError):
            load_build_artifact(tmp_path)

    def test_missing_input_raises_malformed(self, write_build_info: Callable[..., Path]):
        """Test that a file without the input key raises ArtifactMalformedError."""
        path = write_build_info({"solcVersion": "0.8.24", "output": {}})

        with pytest.raises(ArtifactMalformedError) as exc_info:
            load_build_artifact(path)

        assert "input" in str(exc_info.value)

    def test_invalid_json_raises_malformed(self, tmp_path: Path):
        """Test that invalid JSON raises ArtifactMalformedError."""
        path = tmp_path / "invalid.json"
        path.write_text("{ invalid json }")

        with pytest.raises(ArtifactMalformedError):
            load_build_artifact(path)

    def test_non_object_raises_malformed(self, write_build_info: Callable[..., Path]):
        """Test that a JSON array raises ArtifactMalformedError."""
        with pytest.raises(ArtifactMalformedError):
            load_build_artifact(write_build_info([1, 2, 3]))

    def test_missing_compiler_version_raises_malformed(
        self, write_build_info: Callable[..., Path]
    ):
        """Test that a build without any compiler version raises ArtifactMalformedError."""
        with pytest.raises(ArtifactMalformedError):
            load_build_artifact(write_build_info({"input": {"settings": {}}}))


class TestFindBuildInfo:
    """Test the find_build_info function."""

    def test_finds_build_containing_source(self, hardhat_project: Path):
        """Test locating the build-info that compiled a contract."""
        build_info_dir = hardhat_project / "artifacts" / "build-info"

        path = find_build_info(build_info_dir, "project/contracts/KipuBank.sol:KipuBank")

        assert path.parent == build_info_dir
        assert path.name.startswith("solc-0_8_24-")

    def test_skips_output_companions(self, tmp_path: Path):
        """Test that Hardhat 3 *.output.json files are never returned."""
        sources = {"input": {"sources": {"contracts/A.sol": {}}}}
        (tmp_path / "build.output.json").write_text(json.dumps(sources))

        with pytest.raises(ArtifactNotFoundError):
            find_build_info(tmp_path, "contracts/A.sol:A")

    def test_prefers_most_recent_build(self, tmp_path: Path):
        """Test that the newest of several matching builds wins."""
        sources = {"input": {"sources": {"contracts/A.sol": {}}}}
        old = tmp_path / "old.json"
        new = tmp_path / "new.json"
        old.write_text(json.dumps(sources))
        new.write_text(json.dumps(sources))
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(new, (2_000_000, 2_000_000))

        assert find_build_info(tmp_path, "contracts/A.sol:A") == new

    def test_ignores_unreadable_files(self, tmp_path: Path):
        """Test that corrupt build-info files are skipped."""
        (tmp_path / "broken.json").write_text("{ not json")
        good = tmp_path / "good.json"
        good.write_text(json.dumps({"input": {"sources": {"contracts/A.sol": {}}}}))

        assert find_build_info(tmp_path, "contracts/A.sol:A") == good

    def test_no_match_raises_not_found(self, hardhat_project: Path):
        """Test that an unknown source raises ArtifactNotFoundError."""
        with pytest.raises(ArtifactNotFoundError):
            find_build_info(
                hardhat_project / "artifacts" / "build-info", "contracts/Other.sol:Other"
            )

    def test_missing_directory_raises_not_found(self, tmp_path: Path):
        """Test that a missing build-info directory raises ArtifactNotFoundError."""
        with pytest.raises(ArtifactNotFoundError):
            find_build_info(tmp_path / "artifacts" / "build-info", "contracts/A.sol:A")


class TestUndecodableBuildInfo:
    """Test build-info files that are not valid UTF-8."""

    def test_load_raises_malformed(self, tmp_path: Path):
        """Test that invalid UTF-8 raises ArtifactMalformedError."""
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"input": {}, "solcVersion": "\xff\xfe"}')

        with pytest.raises(ArtifactMalformedError):
            load_build_artifact(path)

    def test_find_skips_undecodable_file(self, tmp_path: Path):
        """Test that find_build_info skips files it cannot decode."""
        (tmp_path / "binary.json").write_bytes(b"\xff\xfe")
        good = tmp_path / "good.json"
        good.write_text(json.dumps({"input": {"sources": {"contracts/A.sol": {}}}}))

        assert find_build_info(tmp_path, "contracts/A.sol:A") == good
