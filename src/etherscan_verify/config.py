"""Runtime configuration for etherscan-verify library."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .constants import (
    API_KEY_ENV,
    API_KEY_PLACEHOLDER,
    DEFAULT_INTERVAL_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_NETWORK,
    DEFAULT_REQUEST_TIMEOUT,
    NETWORK_CONFIG,
)
from .exceptions import ConfigurationError


_PRIVATE_KEY_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class VerifierConfig:
    """Settings for one verification run."""

    api_key: str
    network: str = DEFAULT_NETWORK
    api_url: str = NETWORK_CONFIG[DEFAULT_NETWORK]["api_url"]
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    interval_ms: int = DEFAULT_INTERVAL_MS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def chain_id(self) -> int:
        return NETWORK_CONFIG[self.network]["chain_id"]


def load_config(
    network: Optional[str] = None,
    env_file: Optional[Union[Path, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> VerifierConfig:
    """
    Build a VerifierConfig from the environment.

    Reads a .env file (searched from the working directory) unless an
    explicit environ mapping is passed.

    Args:
        network: Network name (defaults to $VERIFY_NETWORK, then "sepolia")
        env_file: Explicit .env path
        environ: Mapping used instead of os.environ (no .env loading)

    Returns:
        VerifierConfig

    Raises:
        ConfigurationError: If API key is missing, network unknown, or a knob
            is not an integer
    """
    if environ is None:
        load_environment(env_file)
        environ = os.environ

    api_key = environ.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} not set in environment (.env)")

    network = resolve_network(network, environ)

    api_url = environ.get("ETHERSCAN_API_URL") or NETWORK_CONFIG[network]["api_url"]

    return VerifierConfig(
        api_key=api_key,
        network=network,
        api_url=api_url,
        max_attempts=_int_setting(environ, "VERIFY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, 1),
        interval_ms=_int_setting(environ, "VERIFY_INTERVAL_MS", DEFAULT_INTERVAL_MS, 0),
    )


def load_environment(env_file: Optional[Union[Path, str]] = None) -> None:
    """Load a .env file into os.environ without overriding existing variables."""
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))


def resolve_network(
    network: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> str:
    """
    Pick the target network: explicit argument, then $VERIFY_NETWORK, then default.

    Raises:
        ConfigurationError: If the network is not in NETWORK_CONFIG
    """
    if environ is None:
        environ = os.environ
    if network is None:
        network = environ.get("VERIFY_NETWORK") or DEFAULT_NETWORK
    if network not in NETWORK_CONFIG:
        raise ConfigurationError(
            f"Unknown network '{network}', expected one of {sorted(NETWORK_CONFIG)}"
        )
    return network


def _int_setting(environ: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from e
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value


def preflight_check(environ: Optional[Mapping[str, str]] = None) -> tuple[List[str], List[str]]:
    """
    Check deployment credentials before a Sepolia deploy-and-verify run.

    Args:
        environ: Mapping to check (defaults to os.environ)

    Returns:
        Tuple of (errors, warnings); errors block deployment, warnings only
        predict a verification failure
    """
    if environ is None:
        environ = os.environ

    errors: List[str] = []
    warnings: List[str] = []

    private_key = environ.get("PRIVATE_KEY", "")
    if not _PRIVATE_KEY_RE.match(private_key):
        errors.append(
            "PRIVATE_KEY must be a 0x-prefixed, 64-hex-character key (total length 66)."
        )

    rpc_url = environ.get("SEPOLIA_RPC_URL", "")
    if not rpc_url:
        errors.append("SEPOLIA_RPC_URL is required (Infura or Alchemy Sepolia endpoint).")
    elif "sepolia" not in rpc_url.lower():
        errors.append(
            'SEPOLIA_RPC_URL does not look like a Sepolia endpoint. It should include "sepolia".'
        )

    api_key = environ.get(API_KEY_ENV, "")
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        warnings.append(f"{API_KEY_ENV} is missing or placeholder. Verification will fail.")

    return errors, warnings
