"""Path management utilities for etherscan-verify library."""

from pathlib import Path
from typing import Optional, Union


def get_project_root(project_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Resolve the Hardhat project root.

    Args:
        project_root: Custom project directory (defaults to the working directory)

    Returns:
        Absolute path to the project root
    """
    if project_root is None:
        return Path.cwd()
    return Path(project_root).absolute()


def get_build_info_dir(project_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the Hardhat build-info directory.

    Returns:
        Path to <project_root>/artifacts/build-info
    """
    return get_project_root(project_root) / "artifacts" / "build-info"


def get_ignition_deployment_paths(
    chain_id: int, project_root: Optional[Union[Path, str]] = None
) -> tuple[Path, Path]:
    """
    Get Hardhat Ignition deployment paths for a chain.

    Args:
        chain_id: Numeric chain id (e.g., 11155111 for Sepolia)
        project_root: Custom project directory (defaults to the working directory)

    Returns:
        Tuple of (deployed_addresses_path, artifacts_dir)
    """
    deployment_dir = (
        get_project_root(project_root) / "ignition" / "deployments" / f"chain-{chain_id}"
    )
    return (deployment_dir / "deployed_addresses.json", deployment_dir / "artifacts")
