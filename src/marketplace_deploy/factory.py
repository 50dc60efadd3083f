"""Contract factory and pending-deployment handles for marketplace-deploy."""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from eth_abi import encode
from eth_utils import to_checksum_address
from loguru import logger

from .artifacts import load_artifact
from .constants import DEFAULT_CONFIRMATIONS, DEFAULT_GAS_MULTIPLIER, DEFAULT_POLL_INTERVAL
from .exceptions import (
    DeploymentFailedError,
    DeploymentNotConfirmedError,
    DeploymentTimeoutError,
)
from .rpc import RPCClient
from .types import ContractArtifact, ContractDeployment


def abi_type(param: Dict[str, Any]) -> str:
    """
    Render an ABI parameter as a canonical type string.

    Tuples are expanded from their components, e.g. "(address,uint256)[]".
    """
    type_str = param["type"]
    if type_str.startswith("tuple"):
        inner = ",".join(abi_type(c) for c in param.get("components", []))
        return f"({inner}){type_str[len('tuple'):]}"
    return type_str


class ContractFactory:
    """A compiled contract bound to an RPC client and a signer."""

    def __init__(self, artifact: ContractArtifact, client: RPCClient, signer):
        self.artifact = artifact
        self.client = client
        self.signer = signer

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    def encode_deploy_data(self, *args: Any) -> str:
        """
        Build creation calldata: bytecode followed by encoded constructor args.

        Raises:
            ValueError: If the argument count does not match the constructor
        """
        inputs = self.artifact.constructor_inputs()
        if len(args) != len(inputs):
            raise ValueError(
                f"{self.contract_name} constructor expects {len(inputs)} "
                f"argument(s), got {len(args)}"
            )
        if not inputs:
            return self.artifact.bytecode
        encoded = encode([abi_type(p) for p in inputs], list(args))
        return self.artifact.bytecode + encoded.hex()

    def deploy(
        self, *args: Any, gas_multiplier: float = DEFAULT_GAS_MULTIPLIER
    ) -> "DeployedContract":
        """
        Submit the contract-creation transaction.

        Exactly one transaction is sent; the returned handle is not yet confirmed.
        """
        data = self.encode_deploy_data(*args)

        gas_estimate = self.client.estimate_gas({"from": self.signer.address, "data": data})
        gas_limit = int(gas_estimate * gas_multiplier)
        logger.info(f"Gas estimate {gas_estimate}, using limit {gas_limit}")

        tx_hash = self.signer.send_transaction({"data": data, "gas": gas_limit})
        logger.info(f"Deployment transaction sent: {tx_hash}")

        return DeployedContract(self, tx_hash, list(args))


class DeployedContract:
    """Handle for a contract whose creation transaction has been submitted."""

    def __init__(self, factory: ContractFactory, transaction_hash: str, constructor_args: List[Any]):
        self.factory = factory
        self.transaction_hash = transaction_hash
        self.constructor_args = constructor_args
        self.receipt: Optional[Dict[str, Any]] = None

    @property
    def deployed(self) -> bool:
        return self.receipt is not None

    def wait_for_deployment(
        self,
        confirmations: int = DEFAULT_CONFIRMATIONS,
        timeout: Optional[float] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> "DeployedContract":
        """
        Block until the creation transaction is included and confirmed.

        Args:
            confirmations: Blocks (including the inclusion block) to wait for
            timeout: Seconds before giving up, None to wait indefinitely
            poll_interval: Seconds between polls

        Returns:
            self, now deployed

        Raises:
            DeploymentFailedError: If the transaction reverted or left no code
            DeploymentTimeoutError: If timeout elapses first
        """
        if self.receipt is not None:
            return self

        client = self.factory.client
        deadline = None if timeout is None else time.monotonic() + timeout

        receipt = client.get_transaction_receipt(self.transaction_hash)
        while receipt is None:
            self._sleep(deadline, poll_interval)
            receipt = client.get_transaction_receipt(self.transaction_hash)

        # Receipts from before Byzantium carry no status
        if int(receipt.get("status") or "0x1", 16) != 1:
            raise DeploymentFailedError(
                f"Deployment transaction {self.transaction_hash} reverted"
            )
        if not receipt.get("contractAddress"):
            raise DeploymentFailedError(
                f"Transaction {self.transaction_hash} did not create a contract"
            )

        receipt_block = int(receipt["blockNumber"], 16)
        logger.info(
            f"Deployment of {receipt['contractAddress']} included in block {receipt_block}"
        )
        if confirmations > 1:
            while client.block_number() - receipt_block + 1 < confirmations:
                self._sleep(deadline, poll_interval)
            logger.info(f"Deployment has {confirmations} confirmations")

        code = client.get_code(receipt["contractAddress"])
        if code in (None, "", "0x"):
            raise DeploymentFailedError(
                f"No code at {receipt['contractAddress']} after deployment"
            )

        self.receipt = receipt
        return self

    def _sleep(self, deadline: Optional[float], poll_interval: float) -> None:
        if deadline is not None and time.monotonic() >= deadline:
            raise DeploymentTimeoutError(
                f"Deployment transaction {self.transaction_hash} not confirmed in time"
            )
        time.sleep(poll_interval)

    def get_address(self) -> str:
        """
        Return the checksummed contract address.

        Raises:
            DeploymentNotConfirmedError: If wait_for_deployment() has not completed
        """
        if self.receipt is None:
            raise DeploymentNotConfirmedError(
                f"Deployment {self.transaction_hash} has not been confirmed yet"
            )
        return to_checksum_address(self.receipt["contractAddress"])

    def to_deployment(self, network: str, block_explorer_url: Optional[str] = None) -> ContractDeployment:
        """Summarize the confirmed deployment."""
        address = self.get_address()
        receipt = self.receipt
        artifact = self.factory.artifact
        return ContractDeployment(
            name=artifact.contract_name,
            network=network,
            address=address,
            transaction_hash=self.transaction_hash,
            block=int(receipt["blockNumber"], 16),
            deployer=to_checksum_address(receipt.get("from") or self.factory.signer.address),
            abi=artifact.abi,
            gas_used=int(receipt["gasUsed"], 16) if receipt.get("gasUsed") else None,
            bytecode=artifact.bytecode,
            deployed_bytecode=artifact.deployed_bytecode,
            constructor_args=self.constructor_args,
            url=f"{block_explorer_url}/address/{address}" if block_explorer_url else None,
        )


def get_contract_factory(
    contract_name: str,
    client: RPCClient,
    signer,
    artifacts_root: Optional[Union[Path, str]] = None,
) -> ContractFactory:
    """
    Resolve a contract factory by name from hardhat artifacts.

    Raises:
        ArtifactNotFoundError: If no artifact exists for the name
        DefectiveArtifactError: If the artifact is ambiguous or not deployable
    """
    artifact = load_artifact(contract_name, artifacts_root)
    logger.debug(f"Loaded artifact {artifact.path}")
    return ContractFactory(artifact, client, signer)
