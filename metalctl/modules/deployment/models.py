"""Data models for deployment manifests."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Profile fields a host takes from the global profile when it leaves them unset
INHERITED_FIELDS = (
    'gateway',
    'subnet',
    'name_server',
    'adapter',
    'repository_address',
    'mirror_directory',
    'username',
    'password',
    'ssh_key_path',
    'packages',
)


class ProfileKind(str, Enum):
    """Boot/installer template families a host can be provisioned with."""
    PRESEED = 'preseed'
    KICKSTART = 'kickstart'
    VSPHERE = 'vsphere'
    DEFAULT = 'default'

    @classmethod
    def from_config_name(cls, name: str) -> 'ProfileKind':
        """Classify a boot config name.

        Names outside the known families are operator defined and boot with
        the generic kernel/initrd/cmdline script.
        """
        try:
            return cls(name)
        except ValueError:
            return cls.DEFAULT


class HostBootProfile(BaseModel):
    """Network, repository and credential settings for a host install."""
    model_config = ConfigDict(populate_by_name=True)

    # Network
    gateway: str = Field(default='', alias='gateway')
    subnet: str = Field(default='', alias='subnet')
    name_server: str = Field(default='', alias='nameserver')
    adapter: str = Field(default='', alias='adapter')

    # Repository
    repository_address: str = Field(default='', alias='repoaddress')
    mirror_directory: str = Field(default='', alias='mirrordir')

    # Identity and credentials
    username: str = Field(default='', alias='username')
    password: str = Field(default='', alias='password')
    ssh_key_path: str = Field(default='', alias='sshkeypath')

    packages: str = Field(default='', alias='packages')

    # Host only, never inherited
    ip_address: str = Field(default='', alias='address')
    server_name: str = Field(default='', alias='hostname')

    def populate_from(self, global_profile: 'HostBootProfile') -> 'HostBootProfile':
        """Return a copy with every unset inheritable field taken from ``global_profile``."""
        updates = {
            name: getattr(global_profile, name)
            for name in INHERITED_FIELDS
            if not getattr(self, name)
        }
        return self.model_copy(update=updates)


class BootConfig(BaseModel):
    """Kernel, initrd and command line for a named boot configuration."""
    model_config = ConfigDict(populate_by_name=True)

    config_name: str = Field(alias='configName')
    kernel: str = Field(default='', alias='kernelPath')
    initrd: str = Field(default='', alias='initrdPath')
    cmdline: str = Field(default='', alias='cmdline')


class DeploymentEntry(BaseModel):
    """A single host in a deployment manifest."""
    model_config = ConfigDict(populate_by_name=True)

    mac: str = Field(alias='mac')
    config_name: str = Field(alias='deployment')
    config_host: HostBootProfile = Field(default_factory=HostBootProfile, alias='config')
    config_boot: Optional[BootConfig] = Field(default=None, alias='bootConfig')

    @field_validator('mac')
    @classmethod
    def mac_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("mac must not be empty")
        return v.strip()

    @property
    def dash_mac(self) -> str:
        """Lowercase MAC with ':' replaced by '-', the stem of every published artifact.

        iPXE expands ${mac:hexhyp} in lowercase, so paths must be lowercase too.
        """
        return self.mac.lower().replace(':', '-')


class DeploymentManifest(BaseModel):
    """Global defaults plus the ordered list of hosts to deploy."""
    model_config = ConfigDict(populate_by_name=True)

    global_config: HostBootProfile = Field(default_factory=HostBootProfile, alias='globalConfig')
    configs: List[DeploymentEntry] = Field(default_factory=list, alias='configs')

    def find(self, mac: str) -> Optional[DeploymentEntry]:
        """Case-insensitive MAC lookup."""
        mac = mac.lower()
        for entry in self.configs:
            if entry.mac.lower() == mac:
                return entry
        return None
