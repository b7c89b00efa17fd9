"""
Deployment manifests: resolution, boot artifact publication and MAC lookup.

Only the models and errors are exported here; import the resolver,
dispatcher and service from their modules.
"""
from .errors import DeploymentError, ManifestError, ResolutionError, RenderError
from .models import (
    INHERITED_FIELDS,
    BootConfig,
    DeploymentEntry,
    DeploymentManifest,
    HostBootProfile,
    ProfileKind,
)

__all__ = [
    'DeploymentError',
    'ManifestError',
    'ResolutionError',
    'RenderError',
    'INHERITED_FIELDS',
    'BootConfig',
    'DeploymentEntry',
    'DeploymentManifest',
    'HostBootProfile',
    'ProfileKind',
]
