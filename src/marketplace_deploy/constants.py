"""Configuration constants for marketplace-deploy."""

DEFAULT_CONTRACT_NAME = "DynamicNFTMarketplace"

DEFAULT_NETWORK = "localhost"

# Network configuration keyed by hardhat network name.
# "default_rpc_env" names the environment variable that overrides "rpc_url".
NETWORK_CONFIG = {
    "localhost": {
        "chain_id": None,  # any node listening on localhost
        "chain_name": "Hardhat Localhost",
        "rpc_url": "http://127.0.0.1:8545",
        "block_explorer_url": None,
        "default_rpc_env": "LOCALHOST_RPC_URL",
    },
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "rpc_url": None,
        "block_explorer_url": "https://sepolia.etherscan.io",
        "default_rpc_env": "SEPOLIA_RPC_URL",
    },
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "rpc_url": None,
        "block_explorer_url": "https://etherscan.io",
        "default_rpc_env": "MAINNET_RPC_URL",
    },
    "polygon": {
        "chain_id": 137,
        "chain_name": "Polygon Mainnet",
        "rpc_url": None,
        "block_explorer_url": "https://polygonscan.com",
        "default_rpc_env": "POLYGON_RPC_URL",
    },
}

# Hardhat writes this into every compilation artifact
HARDHAT_ARTIFACT_FORMAT = "hh-sol-artifact-1"

DEFAULT_CONFIRMATIONS = 1
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_GAS_MULTIPLIER = 1.2
DEFAULT_RPC_TIMEOUT = 30
