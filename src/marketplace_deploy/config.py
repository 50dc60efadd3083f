"""Environment-driven configuration for marketplace-deploy."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .constants import (
    DEFAULT_CONFIRMATIONS,
    DEFAULT_GAS_MULTIPLIER,
    DEFAULT_NETWORK,
    DEFAULT_POLL_INTERVAL,
    NETWORK_CONFIG,
)
from .exceptions import ConfigurationError, NetworkNotFoundError
from .paths import get_artifacts_dir


@dataclass
class DeployConfig:
    """Settings for a single deployment run."""

    network: str
    rpc_url: str
    chain_id: Optional[int]
    block_explorer_url: Optional[str]
    artifacts_dir: Path
    deployments_dir: Optional[Path] = None
    private_key: Optional[str] = None
    from_address: Optional[str] = None
    confirmations: int = DEFAULT_CONFIRMATIONS
    timeout: Optional[float] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    gas_multiplier: float = DEFAULT_GAS_MULTIPLIER

    def __repr__(self) -> str:
        # Never echo the private key into logs or tracebacks
        key = "<set>" if self.private_key else None
        return (
            f"DeployConfig(network={self.network!r}, rpc_url={self.rpc_url!r}, "
            f"chain_id={self.chain_id}, private_key={key}, "
            f"from_address={self.from_address!r}, confirmations={self.confirmations})"
        )


def get_network_config(network: str) -> Dict[str, Any]:
    """
    Get static configuration for a hardhat network name.

    Raises:
        NetworkNotFoundError: If the network is not known
    """
    if network not in NETWORK_CONFIG:
        known = ", ".join(sorted(NETWORK_CONFIG))
        raise NetworkNotFoundError(f"Network '{network}' is not configured (known: {known})")
    return NETWORK_CONFIG[network]


def load_config(env: Optional[Mapping[str, str]] = None) -> DeployConfig:
    """
    Build a DeployConfig from environment variables.

    Args:
        env: Mapping to read instead of os.environ

    Returns:
        DeployConfig for the network named by $HARDHAT_NETWORK

    Raises:
        NetworkNotFoundError: If $HARDHAT_NETWORK names an unknown network
        ConfigurationError: If no RPC URL is available or a number is malformed
    """
    if env is None:
        env = os.environ

    network = env.get("HARDHAT_NETWORK") or DEFAULT_NETWORK
    network_config = get_network_config(network)

    rpc_url = env.get(network_config["default_rpc_env"]) or network_config["rpc_url"]
    if not rpc_url:
        raise ConfigurationError(
            f"RPC URL required for network '{network}': "
            f"set ${network_config['default_rpc_env']}"
        )

    deployments_dir = env.get("DEPLOYMENTS_DIR")
    timeout = env.get("DEPLOY_TIMEOUT")

    confirmations = _parse_number(env, "DEPLOY_CONFIRMATIONS", int, DEFAULT_CONFIRMATIONS)
    if confirmations < 1:
        raise ConfigurationError("DEPLOY_CONFIRMATIONS must be at least 1")

    return DeployConfig(
        network=network,
        rpc_url=rpc_url,
        chain_id=network_config["chain_id"],
        block_explorer_url=network_config["block_explorer_url"],
        artifacts_dir=get_artifacts_dir(env.get("ARTIFACTS_DIR")),
        deployments_dir=Path(deployments_dir).absolute() if deployments_dir else None,
        private_key=env.get("DEPLOYER_PRIVATE_KEY") or None,
        from_address=env.get("DEPLOYER_ADDRESS") or None,
        confirmations=confirmations,
        timeout=_parse_number(env, "DEPLOY_TIMEOUT", float, None) if timeout else None,
        poll_interval=_parse_number(env, "DEPLOY_POLL_INTERVAL", float, DEFAULT_POLL_INTERVAL),
        gas_multiplier=_parse_number(env, "DEPLOY_GAS_MULTIPLIER", float, DEFAULT_GAS_MULTIPLIER),
    )


def _parse_number(env: Mapping[str, str], name: str, kind, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"${name} must be a number, got '{raw}'") from e
