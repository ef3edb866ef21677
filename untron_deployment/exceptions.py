class DeploymentError(Exception):
    """Base class for every failure that aborts a deployment run."""


class ConfigurationError(DeploymentError):
    """Raised when the params file or the environment is invalid."""


class MissingCredential(ConfigurationError):
    """Raised when no deployer private key is available."""


class UnresolvedDependency(ConfigurationError):
    """Raised when a production dependency address is still a placeholder."""


class ArtifactError(DeploymentError):
    """Raised when a contract artifact is missing or malformed."""


class ChainMismatch(DeploymentError):
    """Raised when the connected chain is not the one the params file expects."""


class InvalidArguments(DeploymentError):
    """Raised when call or constructor arguments do not match the ABI."""
