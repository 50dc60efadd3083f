"""Shared pytest fixtures for marketplace-deploy tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import responses
from eth_account import Account
from loguru import logger

RPC_URL = "http://127.0.0.1:8545"

# Hardhat's first default account and the address of its first deployment
DEPLOYER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

# Key for local signing; its address is distinct from the node account
LOCAL_SIGNER_KEY = "0x" + "4c" * 32
LOCAL_SIGNER_ADDRESS = Account.from_key(LOCAL_SIGNER_KEY).address

TX_HASH = "0x" + "ab" * 32
BYTECODE = "0x608060405234801561001057600080fd5b50"
DEPLOYED_BYTECODE = "0x6080604052348015600f57600080fd5b50"

MARKETPLACE_ABI = [
    {
        "type": "function",
        "name": "listItem",
        "inputs": [
            {"name": "tokenId", "type": "uint256"},
            {"name": "price", "type": "uint256"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "event",
        "name": "ItemListed",
        "inputs": [{"name": "tokenId", "type": "uint256", "indexed": True}],
        "anonymous": False,
    },
]


class FakeNode:
    """
    In-memory JSON-RPC node served through responses.

    Receipts stay pending for `pending_polls` lookups, and eth_blockNumber
    advances by one on every call.
    """

    def __init__(self):
        self.chain_id = 31337
        self.accounts = [DEPLOYER_ADDRESS.lower()]
        self.head = 10
        self.receipt_block = 10
        self.pending_polls = 0
        self.receipt_status = "0x1"
        self.contract_address: Optional[str] = CONTRACT_ADDRESS.lower()
        self.code = DEPLOYED_BYTECODE
        self.errors: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.sent: List[Any] = []
        self.raw_sender: Optional[str] = None

    def handle(self, request):
        body = json.loads(request.body)
        method = body["method"]
        self.calls.append(method)

        if method in self.errors:
            payload = {"jsonrpc": "2.0", "id": body["id"], "error": self.errors[method]}
        else:
            result = getattr(self, "rpc_" + method)(*body["params"])
            payload = {"jsonrpc": "2.0", "id": body["id"], "result": result}
        return (200, {}, json.dumps(payload))

    def count(self, method: str) -> int:
        return self.calls.count(method)

    def rpc_eth_chainId(self):
        return hex(self.chain_id)

    def rpc_eth_accounts(self):
        return self.accounts

    def rpc_eth_blockNumber(self):
        self.head += 1
        return hex(self.head)

    def rpc_eth_gasPrice(self):
        return hex(1_000_000_000)

    def rpc_eth_getTransactionCount(self, address, block):
        return "0x0"

    def rpc_eth_estimateGas(self, tx):
        return hex(1_000_000)

    def rpc_eth_sendTransaction(self, tx):
        self.sent.append(tx)
        return TX_HASH

    def rpc_eth_sendRawTransaction(self, raw_tx):
        self.sent.append(raw_tx)
        self.raw_sender = Account.recover_transaction(raw_tx)
        return TX_HASH

    def rpc_eth_getTransactionReceipt(self, tx_hash):
        if self.pending_polls > 0:
            self.pending_polls -= 1
            return None
        return {
            "transactionHash": tx_hash,
            "from": (self.raw_sender or DEPLOYER_ADDRESS).lower(),
            "to": None,
            "contractAddress": self.contract_address,
            "blockNumber": hex(self.receipt_block),
            "gasUsed": hex(900_000),
            "status": self.receipt_status,
        }

    def rpc_eth_getCode(self, address, block):
        return self.code


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks main() bound to captured streams."""
    yield
    logger.remove()


@pytest.fixture
def rpc_url() -> str:
    return RPC_URL


@pytest.fixture
def fake_node(rpc_url: str):
    """Serve a FakeNode at rpc_url for the duration of a test."""
    node = FakeNode()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(
            responses.POST,
            rpc_url,
            callback=node.handle,
            content_type="application/json",
        )
        yield node


def write_artifact(
    artifacts_dir: Path,
    contract_name: str,
    abi: Optional[List[Dict[str, Any]]] = None,
    bytecode: str = BYTECODE,
    source_dir: str = "contracts",
    source_file: Optional[str] = None,
) -> Path:
    """Write a hardhat artifact the way `npx hardhat compile` lays it out."""
    source_file = source_file or f"{contract_name}.sol"
    artifact_dir = artifacts_dir / source_dir / source_file
    artifact_dir.mkdir(parents=True, exist_ok=True)

    artifact_path = artifact_dir / f"{contract_name}.json"
    artifact_path.write_text(
        json.dumps(
            {
                "_format": "hh-sol-artifact-1",
                "contractName": contract_name,
                "sourceName": f"{source_dir}/{source_file}",
                "abi": MARKETPLACE_ABI if abi is None else abi,
                "bytecode": bytecode,
                "deployedBytecode": DEPLOYED_BYTECODE,
                "linkReferences": {},
                "deployedLinkReferences": {},
            },
            indent=2,
        )
    )
    (artifact_dir / f"{contract_name}.dbg.json").write_text(
        json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc.json"})
    )
    return artifact_path


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create a hardhat artifacts tree containing DynamicNFTMarketplace."""
    root = tmp_path / "artifacts"
    write_artifact(root, "DynamicNFTMarketplace")
    build_info = root / "build-info"
    build_info.mkdir(parents=True)
    (build_info / "abc.json").write_text("{}")
    return root


@pytest.fixture
def marketplace_artifact(artifacts_dir: Path) -> Path:
    """Return the path of the DynamicNFTMarketplace artifact."""
    return (
        artifacts_dir
        / "contracts"
        / "DynamicNFTMarketplace.sol"
        / "DynamicNFTMarketplace.json"
    )


@pytest.fixture
def deploy_env(tmp_path: Path, artifacts_dir: Path, monkeypatch) -> Dict[str, str]:
    """Point the driver at a local node and the temporary artifacts."""
    env = {
        "HARDHAT_NETWORK": "localhost",
        "LOCALHOST_RPC_URL": RPC_URL,
        "ARTIFACTS_DIR": str(artifacts_dir),
        "DEPLOY_POLL_INTERVAL": "0",
    }
    for name in (
        "DEPLOYER_PRIVATE_KEY",
        "DEPLOYER_ADDRESS",
        "DEPLOYMENTS_DIR",
        "DEPLOY_CONFIRMATIONS",
        "DEPLOY_TIMEOUT",
        "DEPLOY_GAS_MULTIPLIER",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    # Keep load_dotenv() from picking up a developer's .env
    monkeypatch.chdir(tmp_path)
    return env
