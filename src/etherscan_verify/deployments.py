"""Deployed address lookup from Hardhat Ignition output."""

import json
from pathlib import Path
from typing import Optional, Union

from .exceptions import DeploymentAddressNotFoundError
from .paths import get_ignition_deployment_paths


def read_deployed_address(
    chain_id: int,
    future_id: str,
    project_root: Optional[Union[Path, str]] = None,
) -> str:
    """
    Read the address Ignition recorded for a deployed contract.

    Checks deployed_addresses.json first, then the future's artifact file.

    Args:
        chain_id: Numeric chain id (e.g., 11155111)
        future_id: Ignition future id (e.g., "BankModule#Bank")
        project_root: Hardhat project root (defaults to the working directory)

    Returns:
        Deployed contract address

    Raises:
        DeploymentAddressNotFoundError: If neither file yields an address
    """
    addresses_path, artifacts_dir = get_ignition_deployment_paths(chain_id, project_root)

    addresses = _read_json_object(addresses_path)
    address = addresses.get(future_id)
    if isinstance(address, str) and address:
        return address

    artifact_path = artifacts_dir / f"{future_id}.json"
    artifact = _read_json_object(artifact_path)
    address = artifact.get("address")
    if isinstance(address, str) and address:
        return address

    raise DeploymentAddressNotFoundError(
        f"No address for '{future_id}' in {addresses_path} or {artifact_path}"
    )


def _read_json_object(path: Path) -> dict:
    """Load a JSON object from path, or {} if missing."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DeploymentAddressNotFoundError(f"Failed to parse {path}: {e}") from e
    return data if isinstance(data, dict) else {}
