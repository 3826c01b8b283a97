"""Data types and dataclasses for etherscan-verify library."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import CODE_FORMAT_STANDARD_JSON, DEFAULT_OPTIMIZER_RUNS
from .versions import normalize_compiler_version


@dataclass(frozen=True)
class BuildArtifact:
    """Compiler metadata extracted from a Hardhat build-info document."""

    source_input: Dict[str, Any]  # Standard-JSON compiler input, sent verbatim
    compiler_version: str  # e.g., "v0.8.24+commit.e11b9ed9"
    optimizer_enabled: bool = False
    optimizer_runs: str = DEFAULT_OPTIMIZER_RUNS
    evm_version: Optional[str] = None  # e.g., "cancun"; None means not sent
    path: Optional[Path] = field(default=None, compare=False)

    @property
    def source_names(self) -> List[str]:
        """Source unit names in the compiler input (e.g., "contracts/Bank.sol")."""
        sources = self.source_input.get("sources")
        if not isinstance(sources, dict):
            return []
        return list(sources.keys())


@dataclass(frozen=True)
class VerificationRequest:
    """Fields sent to the explorer's verifysourcecode action."""

    contract_address: str
    contract_name: str  # "<path>:<ContractName>"
    source_code: str  # Serialized standard-JSON input
    constructor_args: str  # ABI-encoded hex, no 0x prefix
    compiler_version: str
    optimization_used: bool
    runs: str
    evm_version: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(
            self, "compiler_version", normalize_compiler_version(self.compiler_version)
        )

    def to_form(self, api_key: str) -> Dict[str, str]:
        """
        Build the form-encoded payload for submission.

        Constructor arguments go out under both the explorer's historical
        misspelled key and the corrected one.

        Args:
            api_key: Explorer API key

        Returns:
            Dictionary of form fields; evmVersion only when set
        """
        form = {
            "module": "contract",
            "action": "verifysourcecode",
            "apikey": api_key,
            "contractaddress": self.contract_address,
            "contractname": self.contract_name,
            "codeformat": CODE_FORMAT_STANDARD_JSON,
            "sourceCode": self.source_code,
            "constructorArguements": self.constructor_args,
            "constructorArgs": self.constructor_args,
            "compilerversion": self.compiler_version,
            "optimizationUsed": "1" if self.optimization_used else "0",
            "runs": self.runs,
        }
        if self.evm_version:
            form["evmVersion"] = self.evm_version
        return form


class JobState(Enum):
    """
    Verification job states.

    SUBMITTED and PENDING are transient; the rest are terminal.
    """

    SUBMITTED = "submitted"
    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.VERIFIED, JobState.FAILED, JobState.TIMED_OUT)


@dataclass
class VerificationJob:
    """One in-flight verification submission."""

    job_id: str  # guid returned by the explorer
    state: JobState = JobState.SUBMITTED
    attempts_made: int = 0
    last_message: Optional[str] = None
