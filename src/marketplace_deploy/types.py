"""Data types and dataclasses for marketplace-deploy."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class ContractArtifact:
    """Compiled contract as produced by hardhat."""

    contract_name: str  # e.g., "DynamicNFTMarketplace"
    source_name: str  # e.g., "contracts/DynamicNFTMarketplace.sol"
    abi: List[Dict[str, Any]]
    bytecode: str  # Creation bytecode, 0x-prefixed
    deployed_bytecode: str  # Runtime bytecode, 0x-prefixed
    path: Optional[Path] = None

    def constructor_inputs(self) -> List[Dict[str, Any]]:
        """Return the constructor's ABI inputs (empty when there is no constructor)."""
        for item in self.abi:
            if item.get("type") == "constructor":
                return item.get("inputs", [])
        return []


@dataclass
class ContractDeployment:
    """Information about a deployed contract."""

    # Required fields
    name: str  # Contract name, e.g., "DynamicNFTMarketplace"
    network: str  # Hardhat network name, e.g., "sepolia"
    address: str  # Checksummed address
    transaction_hash: str
    block: int  # Block the deployment was included in
    deployer: str  # Checksummed sender address
    abi: List[Dict[str, Any]]

    # Optional fields
    gas_used: Optional[int] = None
    bytecode: Optional[str] = None
    deployed_bytecode: Optional[str] = None
    constructor_args: List[Any] = field(default_factory=list)
    url: Optional[str] = None  # Block explorer URL, None on local networks
