"""JSON-RPC client for marketplace-deploy."""

import itertools
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from .constants import DEFAULT_RPC_TIMEOUT
from .exceptions import RPCError


class RPCClient:
    """Minimal Ethereum JSON-RPC 2.0 client over HTTP."""

    def __init__(self, url: str, timeout: int = DEFAULT_RPC_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self._ids = itertools.count(1)

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Perform a JSON-RPC call and return its result member.

        Args:
            method: RPC method name, e.g. "eth_chainId"
            params: Positional parameters

        Returns:
            The decoded "result" value (may be None, e.g. for a pending receipt)

        Raises:
            RPCError: On transport failure, non-200 status or an RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }
        logger.debug(f"RPC {method} {payload['params']}")

        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RPCError(f"Network error during RPC call {method}: {e}") from e

        if response.status_code != 200:
            raise RPCError(
                f"RPC request {method} failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise RPCError(f"RPC response to {method} is not valid JSON") from e

        if "error" in result:
            error = result["error"]
            if isinstance(error, dict):
                raise RPCError(
                    f"RPC error in {method}: {error.get('message', error)}",
                    code=error.get("code"),
                )
            raise RPCError(f"RPC error in {method}: {error}")

        if "result" not in result:
            raise RPCError(f"RPC response to {method} has no result")
        return result["result"]

    def chain_id(self) -> int:
        return int(self.call("eth_chainId"), 16)

    def accounts(self) -> List[str]:
        return self.call("eth_accounts")

    def block_number(self) -> int:
        return int(self.call("eth_blockNumber"), 16)

    def gas_price(self) -> int:
        return int(self.call("eth_gasPrice"), 16)

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        return int(self.call("eth_getTransactionCount", [address, block]), 16)

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        return int(self.call("eth_estimateGas", [tx]), 16)

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        return self.call("eth_sendTransaction", [tx])

    def send_raw_transaction(self, raw_tx: str) -> str:
        return self.call("eth_sendRawTransaction", [raw_tx])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return self.call("eth_getTransactionReceipt", [tx_hash])

    def get_code(self, address: str, block: str = "latest") -> str:
        return self.call("eth_getCode", [address, block])
