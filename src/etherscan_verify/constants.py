"""Configuration constants for etherscan-verify library."""

# Network configuration for the Etherscan-compatible explorers we submit to
NETWORK_CONFIG = {
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "api_url": "https://api-sepolia.etherscan.io/api",
        "block_explorer_url": "https://sepolia.etherscan.io",
    },
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "api_url": "https://api.etherscan.io/api",
        "block_explorer_url": "https://etherscan.io",
    },
}

DEFAULT_NETWORK = "sepolia"

# Polling knobs (~60 second verification window)
DEFAULT_MAX_ATTEMPTS = 20
DEFAULT_INTERVAL_MS = 3000

# Seconds per HTTP request
DEFAULT_REQUEST_TIMEOUT = 30

# Used when the optimizer is disabled or has no runs value
DEFAULT_OPTIMIZER_RUNS = "200"

CODE_FORMAT_STANDARD_JSON = "solidity-standard-json-input"

# Explorer "status" discriminators
STATUS_OK = "1"
STATUS_NOTOK = "0"

# Case-insensitive substrings that mark a status:"0" poll message as terminal failure
FAILURE_PATTERNS = ("fail", "error")

API_KEY_ENV = "ETHERSCAN_API_KEY"
API_KEY_PLACEHOLDER = "your_etherscan_api_key_here"
