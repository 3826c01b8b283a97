"""Custom exception classes for etherscan-verify library."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import VerificationJob


class VerificationError(Exception):
    """Base exception for contract verification errors."""

    pass


class ConfigurationError(VerificationError, ValueError):
    """Raised when the API key or a polling knob is missing or invalid."""

    pass


class ArtifactError(VerificationError):
    """Base exception for build artifact errors."""

    pass


class ArtifactNotFoundError(ArtifactError, FileNotFoundError):
    """Raised when a build artifact path does not resolve to a readable file."""

    pass


class ArtifactMalformedError(ArtifactError, ValueError):
    """Raised when a build artifact is not valid JSON or lacks its compiler input."""

    pass


class DeploymentAddressNotFoundError(VerificationError, LookupError):
    """Raised when no deployed address can be read from Ignition output."""

    pass


class SubmissionError(VerificationError):
    """Raised when the verification request could not be delivered."""

    pass


class SubmissionRejectedError(SubmissionError):
    """Raised when the explorer explicitly refuses a verification request."""

    def __init__(self, service_message: str):
        super().__init__(f"Verification submission rejected: {service_message}")
        self.service_message = service_message


class PollError(VerificationError):
    """Raised when polling a verification job does not end in success."""

    def __init__(self, message: str, job: Optional["VerificationJob"] = None):
        super().__init__(message)
        self.job = job


class VerificationFailedError(PollError):
    """Raised when the explorer reports that verification failed."""

    pass


class PollTimeoutError(PollError):
    """Raised when the attempt budget runs out before a terminal status."""

    pass
