"""Custom exception classes for marketplace-deploy."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when no compilation artifact exists for a contract name."""

    pass


class DefectiveArtifactError(DeploymentError, ValueError):
    """Raised when a compilation artifact cannot be deployed as-is."""

    pass


class DefectiveDeploymentError(DeploymentError, ValueError):
    """Raised when a deployment record file is missing required block number."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when an environment setting is missing or malformed."""

    pass


class RPCError(DeploymentError, RuntimeError):
    """Raised when the JSON-RPC endpoint fails or returns an error object."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class DeploymentFailedError(DeploymentError, RuntimeError):
    """Raised when the deployment transaction reverted or left no code behind."""

    pass


class DeploymentTimeoutError(DeploymentError, TimeoutError):
    """Raised when the deployment is not confirmed within the timeout."""

    pass


class DeploymentNotConfirmedError(DeploymentError, RuntimeError):
    """Raised when the address is read before the deployment is confirmed."""

    pass
