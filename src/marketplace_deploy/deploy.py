"""Deployment driver for the DynamicNFTMarketplace contract."""

import os
import sys
from typing import Any, Optional, Sequence

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from .config import DeployConfig, load_config
from .constants import DEFAULT_CONTRACT_NAME
from .exceptions import ConfigurationError
from .factory import get_contract_factory
from .records import save_deployment_record
from .rpc import RPCClient
from .signers import make_signer
from .types import ContractDeployment


def configure_logging(level: Optional[str] = None) -> None:
    """Send diagnostics to stderr so stdout carries only the deployment report."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level or os.environ.get("LOG_LEVEL", "INFO"),
    )


def deploy_contract(
    contract_name: str,
    config: DeployConfig,
    args: Sequence[Any] = (),
) -> ContractDeployment:
    """
    Deploy one contract and wait until it is confirmed.

    The factory is resolved from local artifacts before any RPC call is made.
    A single transaction is submitted and never retried.

    Args:
        contract_name: Name of the compiled contract
        config: Network, signer and wait settings
        args: Constructor arguments

    Returns:
        ContractDeployment describing the confirmed contract

    Raises:
        DeploymentError: Any failure while resolving, submitting or confirming
    """
    client = RPCClient(config.rpc_url)
    signer = make_signer(client, config.private_key, config.from_address)

    factory = get_contract_factory(contract_name, client, signer, config.artifacts_dir)

    # localhost accepts whatever node is listening there
    if config.chain_id is not None:
        chain_id = client.chain_id()
        if chain_id != config.chain_id:
            raise ConfigurationError(
                f"RPC endpoint for '{config.network}' reports chain id {chain_id}, "
                f"expected {config.chain_id}"
            )
    logger.info(f"Deploying {contract_name} on {config.network} from {signer.address}")

    contract = factory.deploy(*args, gas_multiplier=config.gas_multiplier)
    contract.wait_for_deployment(
        confirmations=config.confirmations,
        timeout=config.timeout,
        poll_interval=config.poll_interval,
    )

    deployment = contract.to_deployment(config.network, config.block_explorer_url)
    if deployment.gas_used is not None:
        logger.info(f"Gas used: {deployment.gas_used}")
    return deployment


def main() -> int:
    """Run the deployment and return the process exit code."""
    try:
        load_dotenv(find_dotenv(usecwd=True))
        configure_logging()

        print(f"Deploying {DEFAULT_CONTRACT_NAME} contract...")
        config = load_config()
        deployment = deploy_contract(DEFAULT_CONTRACT_NAME, config)
        print(f"{DEFAULT_CONTRACT_NAME} deployed to: {deployment.address}")
        # The address is already on stdout if writing the record fails
        if config.deployments_dir is not None:
            save_deployment_record(deployment, config.deployments_dir)
        print("Deployment completed successfully!")
    except Exception as e:
        print(e, file=sys.stderr)
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
