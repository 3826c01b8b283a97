"""Compiler version utilities for etherscan-verify library."""


def normalize_compiler_version(version: str) -> str:
    """
    Ensure a solc version string carries the leading 'v' explorers expect.

    Idempotent: versions already starting with 'v' are returned unchanged.

    Args:
        version: Compiler version (e.g., "0.8.24" or "v0.8.24+commit.e11b9ed9")

    Returns:
        Version string starting with 'v'
    """
    if version.startswith("v"):
        return version
    return f"v{version}"
