"""
Certificate choreography for a three node etcd cluster.

Produces the ordered list of actions that writes a kubeadm config for every
member, then generates each member's certificates on the node running the
plan. Members are processed last-declared first so that the first member's
certificates are generated last and stay in place; the other members'
certificates are archived and downloaded for distribution.
"""
import logging
from typing import List

from metalctl.modules.etcd.kubeadm import render_kubeadm_config
from metalctl.modules.etcd.models import Action, EtcdTopology, DEFAULT_KUBEADM_API_VERSION

logger = logging.getLogger("metalctl.etcd")

PKI_DIR = "/etc/kubernetes/pki"
# Everything kubeadm generated except the CA itself
GENERATED_CERTS = f"find {PKI_DIR} -not -name ca.crt -not -name ca.key -type f"

CERT_PHASES = [
    ("etcd-server", "Generate etcd server certificate for [{}]"),
    ("etcd-peer", "Generate peer certificate for [{}]"),
    ("etcd-healthcheck-client", "Generate health check certificate for [{}]"),
    ("apiserver-etcd-client", "Generate api-server client certificate for [{}]"),
]


def config_path(address: str) -> str:
    return f"/tmp/{address}/kubeadmcfg.yaml"


def archive_path(address: str) -> str:
    return f"/tmp/{address}.tar.gz"


def plan(topology: EtcdTopology) -> List[Action]:
    """Build the full etcd bootstrap plan for ``topology``.

    Actions must be executed strictly in order.
    """
    actions: List[Action] = []

    if topology.init_ca:
        actions.append(Action.run(
            name="Initialise Certificate Authority",
            command="kubeadm init phase certs etcd-ca",
            sudo_user="root",
        ))

    api_version = topology.api_version or DEFAULT_KUBEADM_API_VERSION

    dirs = " ".join(f"/tmp/{address}/" for address in topology.addresses)
    actions.append(Action.run(name="Generate temporary directories", command=f"mkdir -p {dirs}"))

    for index, (hostname, address) in enumerate(topology.pairs()):
        rendered = render_kubeadm_config(api_version, hostname, address, topology)
        actions.append(Action.run(
            name=f"build kubeadm config for node {index}",
            command=f"echo '{rendered}' > {config_path(address)}",
        ))

    actions.extend(certificate_actions(list(reversed(topology.addresses))))

    logger.debug(f"Generated {len(actions)} actions for etcd members {topology.hostnames}")
    return actions


def certificate_actions(addresses: List[str]) -> List[Action]:
    """Generate certificates for each address in the order given.

    Every address but the last one gets its certificates archived and downloaded.
    """
    actions: List[Action] = []
    last = len(addresses) - 1

    for i, address in enumerate(addresses):
        actions.append(Action.run(
            name="Remove any existing certificates before attempting to generate any new ones",
            command=f"{GENERATED_CERTS} -delete",
            sudo_user="root",
        ))

        for phase, name in CERT_PHASES:
            actions.append(Action.run(
                name=name.format(address),
                command=f"kubeadm init phase certs {phase} --config={config_path(address)}",
                sudo_user="root",
            ))

        if i != last:
            actions.append(Action.run(
                name=f"Archive generated certificates [{address}]",
                command=f"tar -cvzf {archive_path(address)} $({GENERATED_CERTS}) {config_path(address)}",
                sudo_user="root",
            ))
            actions.append(Action.download(
                name=f"Retrieve the certificate bundle for [{address}]",
                source=archive_path(address),
                destination=archive_path(address),
            ))

    return actions
