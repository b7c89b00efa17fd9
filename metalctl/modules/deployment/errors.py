"""Exceptions raised while resolving and publishing deployment manifests."""


class DeploymentError(Exception):
    """Base exception for deployment configuration errors."""
    pass


class ManifestError(DeploymentError):
    """Raised when a submitted manifest cannot be parsed."""
    pass


class ResolutionError(DeploymentError):
    """Raised when a host references a boot config that does not exist."""

    def __init__(self, mac: str, config_name: str):
        self.mac = mac
        self.config_name = config_name
        super().__init__(f"Host [{mac}] uses unknown config [{config_name}], stopping config update")


class RenderError(DeploymentError):
    """Raised when a template is missing a value it cannot do without."""
    pass
