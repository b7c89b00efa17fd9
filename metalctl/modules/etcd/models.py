"""Data models for etcd bootstrap plans."""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# kubeadm API used when a topology does not name one (< 1.12 clusters)
DEFAULT_KUBEADM_API_VERSION = 'v1beta1'


class ActionKind(str, Enum):
    """Kinds of remote work an executor knows how to run."""
    COMMAND = 'command'
    DOWNLOAD = 'download'


@dataclass(frozen=True)
class Action:
    """A single remote step in a bootstrap plan."""
    kind: ActionKind
    name: str
    command: str = ''
    sudo_user: Optional[str] = None
    source: str = ''
    destination: str = ''

    def __post_init__(self):
        if self.kind == ActionKind.DOWNLOAD:
            if not self.source or not self.destination:
                raise ValueError(f"Download action '{self.name}' needs a source and a destination")
        elif not self.command:
            raise ValueError(f"Command action '{self.name}' has no command")

    @classmethod
    def run(cls, name: str, command: str, sudo_user: Optional[str] = None) -> 'Action':
        return cls(kind=ActionKind.COMMAND, name=name, command=command, sudo_user=sudo_user)

    @classmethod
    def download(cls, name: str, source: str, destination: str) -> 'Action':
        return cls(kind=ActionKind.DOWNLOAD, name=name, source=source, destination=destination)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise for an external executor, dropping fields the kind does not use."""
        data = asdict(self)
        data['kind'] = self.kind.value
        return {k: v for k, v in data.items() if v not in ('', None)}


@dataclass
class EtcdMember:
    hostname: str
    address: str


@dataclass
class EtcdTopology:
    """Three etcd members plus the certificate options for the plan."""
    members: List[EtcdMember] = field(default_factory=list)
    init_ca: bool = False
    api_version: str = ''

    def __post_init__(self):
        if len(self.members) != 3:
            raise ValueError(f"An etcd topology needs exactly 3 members, got {len(self.members)}")

    @property
    def hostnames(self) -> List[str]:
        return [m.hostname for m in self.members]

    @property
    def addresses(self) -> List[str]:
        return [m.address for m in self.members]

    def pairs(self) -> List[Tuple[str, str]]:
        return [(m.hostname, m.address) for m in self.members]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EtcdTopology':
        """Build a topology from either a ``members`` list or the flat
        ``hostname1``/``address1`` ... ``hostname3``/``address3`` layout."""
        if 'members' in data:
            members = [EtcdMember(hostname=m['hostname'], address=m['address']) for m in data['members']]
        else:
            members = [
                EtcdMember(hostname=data.get(f'hostname{i}', ''), address=data.get(f'address{i}', ''))
                for i in (1, 2, 3)
            ]
        init_ca = data.get('init_ca', data.get('initCA', False))
        api_version = data.get('api_version', data.get('apiversion', '')) or ''
        if isinstance(init_ca, str):
            init_ca = init_ca.strip().lower() in ('1', 'true', 'yes', 'on')
        return cls(members=members, init_ca=bool(init_ca), api_version=api_version)
