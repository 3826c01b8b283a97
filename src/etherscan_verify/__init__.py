"""
etherscan-verify: Python library for verifying deployed smart contracts on Etherscan
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import find_build_info, load_build_artifact
from .client import VerificationClient, build_verification_request
from .config import VerifierConfig, load_config
from .exceptions import (
    ArtifactError,
    ArtifactMalformedError,
    ArtifactNotFoundError,
    ConfigurationError,
    DeploymentAddressNotFoundError,
    PollError,
    PollTimeoutError,
    SubmissionError,
    SubmissionRejectedError,
    VerificationError,
    VerificationFailedError,
)
from .types import BuildArtifact, JobState, VerificationJob, VerificationRequest
from .workflow import verify_contract

try:
    __version__ = version("etherscan-verify")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "load_build_artifact",
    "find_build_info",
    "VerificationClient",
    "build_verification_request",
    "verify_contract",
    "VerifierConfig",
    "load_config",
    "BuildArtifact",
    "VerificationRequest",
    "VerificationJob",
    "JobState",
    "VerificationError",
    "ConfigurationError",
    "ArtifactError",
    "ArtifactNotFoundError",
    "ArtifactMalformedError",
    "DeploymentAddressNotFoundError",
    "SubmissionError",
    "SubmissionRejectedError",
    "PollError",
    "VerificationFailedError",
    "PollTimeoutError",
]
