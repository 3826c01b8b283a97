"""End-to-end verification workflow for etherscan-verify library."""

import logging
from pathlib import Path
from typing import Optional, Union

from .artifacts import load_build_artifact
from .client import VerificationClient
from .config import VerifierConfig
from .types import VerificationJob

logger = logging.getLogger(__name__)


def verify_contract(
    config: VerifierConfig,
    artifact_path: Union[Path, str],
    contract_address: str,
    qualified_name: str,
    constructor_args_hex: str = "",
    client: Optional[VerificationClient] = None,
) -> VerificationJob:
    """
    Load a build artifact, submit it for verification and poll to completion.

    Args:
        config: Verification settings (API key, endpoint, polling knobs)
        artifact_path: Path to the build-info file
        contract_address: Deployed contract address
        qualified_name: Fully-qualified contract name ("<path>:<ContractName>")
        constructor_args_hex: ABI-encoded constructor arguments
        client: Client to use (defaults to one built from config)

    Returns:
        VerificationJob in VERIFIED state

    Raises:
        ArtifactError: If the build artifact is missing or malformed
        SubmissionError: If submission fails or is rejected
        PollError: If verification fails, times out or polling hits a network error
    """
    if client is None:
        client = VerificationClient(config.api_url, timeout=config.request_timeout)

    logger.info("Using build info %s", artifact_path)
    artifact = load_build_artifact(artifact_path)
    job_id = client.submit(
        artifact, contract_address, qualified_name, constructor_args_hex, config.api_key
    )
    return client.poll(
        job_id,
        config.api_key,
        max_attempts=config.max_attempts,
        interval_ms=config.interval_ms,
    )
