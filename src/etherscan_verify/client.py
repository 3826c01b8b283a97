"""Explorer verification API client for etherscan-verify library."""

import json
import logging
import time
from typing import Any, Callable, Dict

import requests

from .constants import (
    DEFAULT_INTERVAL_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_REQUEST_TIMEOUT,
    FAILURE_PATTERNS,
    STATUS_NOTOK,
    STATUS_OK,
)
from .encoding import normalize_constructor_args
from .exceptions import (
    PollError,
    PollTimeoutError,
    SubmissionError,
    SubmissionRejectedError,
    VerificationFailedError,
)
from .types import BuildArtifact, JobState, VerificationJob, VerificationRequest

logger = logging.getLogger(__name__)


def is_failure_message(message: str) -> bool:
    """
    Check whether a status:"0" poll message reports a terminal failure.

    Any message that does not match is treated as progress.

    Args:
        message: Result text from checkverifystatus

    Returns:
        True if message contains "fail" or "error" (case-insensitive)
    """
    lowered = message.lower()
    return any(pattern in lowered for pattern in FAILURE_PATTERNS)


def build_verification_request(
    artifact: BuildArtifact,
    contract_address: str,
    qualified_name: str,
    constructor_args_hex: str = "",
) -> VerificationRequest:
    """
    Assemble a verification request from a build artifact.

    Args:
        artifact: Loaded build-info artifact
        contract_address: Deployed contract address
        qualified_name: Fully-qualified contract name ("<path>:<ContractName>")
        constructor_args_hex: ABI-encoded constructor arguments (0x prefix optional)

    Returns:
        VerificationRequest ready for submission

    Raises:
        ValueError: If qualified_name is not "<path>:<ContractName>" or the
            constructor arguments are not hex
    """
    source_name, _, contract_name = qualified_name.rpartition(":")
    if not source_name or not contract_name:
        raise ValueError(
            f"Contract name must be fully qualified as <path>:<ContractName>, got '{qualified_name}'"
        )

    if artifact.source_names and source_name not in artifact.source_names:
        logger.warning(
            "Source '%s' is not part of the build input; the explorer will likely reject it",
            source_name,
        )

    return VerificationRequest(
        contract_address=contract_address,
        contract_name=qualified_name,
        source_code=json.dumps(artifact.source_input, separators=(",", ":")),
        constructor_args=normalize_constructor_args(constructor_args_hex),
        compiler_version=artifact.compiler_version,
        optimization_used=artifact.optimizer_enabled,
        runs=artifact.optimizer_runs,
        evm_version=artifact.evm_version,
    )


class VerificationClient:
    """Submits source verification requests and polls them to completion."""

    def __init__(
        self,
        api_url: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the client.

        Args:
            api_url: Explorer API endpoint (e.g., https://api-sepolia.etherscan.io/api)
            timeout: Seconds per HTTP request
            sleep: Delay function called between poll attempts (seconds)
        """
        self.api_url = api_url
        self.timeout = timeout
        self._sleep = sleep

    def submit(
        self,
        artifact: BuildArtifact,
        contract_address: str,
        qualified_name: str,
        constructor_args_hex: str,
        api_key: str,
    ) -> str:
        """
        Submit a verification request. Makes exactly one attempt.

        Args:
            artifact: Loaded build-info artifact
            contract_address: Deployed contract address
            qualified_name: Fully-qualified contract name ("<path>:<ContractName>")
            constructor_args_hex: ABI-encoded constructor arguments
            api_key: Explorer API key

        Returns:
            Job identifier (guid) for polling

        Raises:
            ValueError: If request parameters are invalid
            SubmissionError: If the request could not be delivered or decoded, or an
                accepted response carries no guid
            SubmissionRejectedError: If the explorer refused the request
        """
        request = build_verification_request(
            artifact, contract_address, qualified_name, constructor_args_hex
        )
        logger.info(
            "Submitting verification for %s at %s (compiler %s)",
            qualified_name,
            contract_address,
            request.compiler_version,
        )

        try:
            response = requests.post(
                self.api_url, data=request.to_form(api_key), timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except (requests.RequestException, ValueError) as e:
            raise SubmissionError(f"Network error during verification submission: {e}") from e

        status, message = _unpack(result)
        if status != STATUS_OK:
            logger.error("Explorer rejected submission: %s", message)
            raise SubmissionRejectedError(message)

        job_id = result.get("result")
        if not isinstance(job_id, str) or not job_id.strip():
            raise SubmissionError(f"Explorer accepted submission but returned no GUID: {result!r}")

        logger.info("Submission GUID: %s", job_id)
        return job_id

    def check_status(self, job_id: str, api_key: str) -> Dict[str, Any]:
        """
        Query the status of a verification job once.

        Args:
            job_id: guid returned by submit()
            api_key: Explorer API key

        Returns:
            Decoded JSON response ({"status": ..., "result": ...})

        Raises:
            PollError: If the request could not be delivered or decoded
        """
        try:
            response = requests.get(
                self.api_url,
                params={
                    "module": "contract",
                    "action": "checkverifystatus",
                    "guid": job_id,
                    "apikey": api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except (requests.RequestException, ValueError) as e:
            raise PollError(f"Network error while checking verification status: {e}") from e

        if not isinstance(result, dict):
            raise PollError(f"Unexpected status response: {result!r}")
        return result

    def poll(
        self,
        job_id: str,
        api_key: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> VerificationJob:
        """
        Poll a verification job until it reaches a terminal state.

        Each attempt waits interval_ms before querying. status "1" means verified;
        status "0" with a failure message means failed; anything else is progress.

        Args:
            job_id: guid returned by submit()
            api_key: Explorer API key
            max_attempts: Number of status queries before giving up
            interval_ms: Delay before each query, in milliseconds

        Returns:
            VerificationJob in VERIFIED state; last_message holds the receipt

        Raises:
            ValueError: If max_attempts < 1 or interval_ms < 0
            VerificationFailedError: If the explorer reports failure
            PollTimeoutError: If max_attempts pass without a terminal status
            PollError: If a status request could not be delivered
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if interval_ms < 0:
            raise ValueError(f"interval_ms must not be negative, got {interval_ms}")

        job = VerificationJob(job_id=job_id)

        while job.attempts_made < max_attempts:
            self._sleep(interval_ms / 1000)

            try:
                result = self.check_status(job_id, api_key)
            except PollError as e:
                e.job = job
                raise

            job.attempts_made += 1
            status, message = _unpack(result)
            job.last_message = message

            if status == STATUS_OK:
                job.state = JobState.VERIFIED
                logger.info("Verified: %s", message)
                return job

            if status == STATUS_NOTOK and is_failure_message(message):
                job.state = JobState.FAILED
                logger.error("Verification failed: %s", message)
                raise VerificationFailedError(f"Verification failed: {message}", job)

            job.state = JobState.PENDING
            logger.info("Pending (%d/%d): %s", job.attempts_made, max_attempts, message)

        job.state = JobState.TIMED_OUT
        logger.error("Timed out waiting for verification after %d attempts", max_attempts)
        raise PollTimeoutError(
            f"Timed out waiting for verification of {job_id} after {max_attempts} attempts",
            job,
        )


def _unpack(result: Any) -> tuple[str, str]:
    """Split an explorer response into (status, result message)."""
    if not isinstance(result, dict):
        return "", str(result)
    message = result.get("result")
    if message is None or message == "":
        message = "Unknown"
    return str(result.get("status", "")), str(message)
