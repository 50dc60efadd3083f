"""Transaction signers for marketplace-deploy."""

from typing import Any, Dict, Optional

from eth_account import Account
from eth_utils import to_checksum_address
from loguru import logger

from .exceptions import ConfigurationError
from .rpc import RPCClient


class NodeSigner:
    """
    Sends transactions from an account unlocked on the node.

    This is how a local hardhat node or anvil instance deploys: the node holds
    the keys and signs eth_sendTransaction requests itself.
    """

    def __init__(self, client: RPCClient, address: Optional[str] = None):
        self.client = client
        self._address = to_checksum_address(address) if address else None

    @property
    def address(self) -> str:
        # Resolved on first use so that building a signer makes no RPC call
        if self._address is None:
            accounts = self.client.accounts()
            if not accounts:
                raise ConfigurationError(
                    "Node exposes no unlocked accounts; set DEPLOYER_PRIVATE_KEY"
                )
            self._address = to_checksum_address(accounts[0])
        return self._address

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """Submit tx via eth_sendTransaction and return its hash."""
        request = {"from": self.address, **tx}
        if "gas" in request:
            request["gas"] = hex(request["gas"])
        if "value" in request:
            request["value"] = hex(request["value"])
        return self.client.send_transaction(request)


class LocalAccountSigner:
    """Signs transactions locally with a private key before submitting them."""

    def __init__(self, client: RPCClient, private_key: str):
        self.client = client
        try:
            self._account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid deployer private key: {e}") from e
        self.address = self._account.address

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """Fill nonce, gas price and chain id, sign, and submit tx."""
        unsigned = {
            "nonce": self.client.get_transaction_count(self.address, "pending"),
            "gasPrice": self.client.gas_price(),
            "chainId": self.client.chain_id(),
            "value": 0,
            **tx,
        }
        logger.debug(f"Signing transaction with nonce {unsigned['nonce']}")
        signed = self._account.sign_transaction(unsigned)
        return self.client.send_raw_transaction("0x" + bytes(signed.raw_transaction).hex())


def make_signer(
    client: RPCClient,
    private_key: Optional[str] = None,
    from_address: Optional[str] = None,
):
    """
    Pick the signer for a deployment.

    A private key wins over a node account; without either the node's first
    unlocked account is used.
    """
    if private_key:
        return LocalAccountSigner(client, private_key)
    return NodeSigner(client, from_address)
