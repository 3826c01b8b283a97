"""Constructor argument encoding for etherscan-verify library."""

import re
from typing import Any, List, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError, ParseError

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def normalize_constructor_args(args_hex: str) -> str:
    """
    Normalize ABI-encoded constructor arguments for submission.

    Args:
        args_hex: Hex string, with or without 0x prefix (may be empty)

    Returns:
        Hex string without 0x prefix

    Raises:
        ValueError: If the string is not even-length hex
    """
    args_hex = args_hex.strip()
    if args_hex[:2].lower() == "0x":
        args_hex = args_hex[2:]

    if not _HEX_RE.match(args_hex) or len(args_hex) % 2:
        raise ValueError(f"Constructor arguments are not valid hex: {args_hex!r}")

    return args_hex


def encode_constructor_args(types: Sequence[str], values: Sequence[Any]) -> str:
    """
    ABI-encode constructor arguments (32 bytes per static argument).

    Hex strings given for bytes types are converted to bytes first.

    Args:
        types: Solidity ABI types (e.g., ["uint256", "address"])
        values: Matching argument values

    Returns:
        Encoded hex string without 0x prefix

    Raises:
        ValueError: If types and values differ in length or a value does not fit its type
    """
    if len(types) != len(values):
        raise ValueError(
            f"Got {len(values)} constructor values for {len(types)} types"
        )

    coerced: List[Any] = [_coerce_value(t, v) for t, v in zip(types, values)]
    try:
        return encode(list(types), coerced).hex()
    except (EncodingError, ParseError) as e:
        raise ValueError(f"Failed to encode constructor arguments: {e}") from e


def _coerce_value(abi_type: str, value: Any) -> Any:
    """Convert JSON-friendly values into what eth_abi expects for a type."""
    if abi_type.endswith("]"):
        element_type = abi_type[: abi_type.rindex("[")]
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Expected a list for {abi_type}, got {value!r}")
        return [_coerce_value(element_type, v) for v in value]

    if abi_type.startswith("bytes") and isinstance(value, str):
        return bytes.fromhex(value[2:] if value.startswith("0x") else value)

    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 0)

    return value
