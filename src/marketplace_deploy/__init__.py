"""
marketplace-deploy: deploys the DynamicNFTMarketplace contract from hardhat artifacts
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeployConfig, load_config
from .deploy import deploy_contract, main
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    DefectiveArtifactError,
    DefectiveDeploymentError,
    DeploymentError,
    DeploymentFailedError,
    DeploymentNotConfirmedError,
    DeploymentTimeoutError,
    NetworkNotFoundError,
    RPCError,
)
from .factory import ContractFactory, DeployedContract, get_contract_factory
from .types import ContractArtifact, ContractDeployment

try:
    __version__ = version("marketplace-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "deploy_contract",
    "main",
    "get_contract_factory",
    "load_config",
    "DeployConfig",
    "ContractFactory",
    "DeployedContract",
    "ContractArtifact",
    "ContractDeployment",
    "DeploymentError",
    "ArtifactNotFoundError",
    "DefectiveArtifactError",
    "DefectiveDeploymentError",
    "NetworkNotFoundError",
    "ConfigurationError",
    "RPCError",
    "DeploymentFailedError",
    "DeploymentTimeoutError",
    "DeploymentNotConfirmedError",
]
