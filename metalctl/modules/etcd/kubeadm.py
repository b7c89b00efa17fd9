"""kubeadm ClusterConfiguration rendering for external etcd members."""
from metalctl.modules.etcd.models import EtcdTopology

ETCD_KUBEADM_TEMPLATE = """apiVersion: "kubeadm.k8s.io/{api_version}"
kind: ClusterConfiguration
etcd:
    local:
        serverCertSANs:
        - "{address}"
        peerCertSANs:
        - "{address}"
        extraArgs:
            initial-cluster: {initial_cluster}
            initial-cluster-state: new
            name: {hostname}
            listen-peer-urls: https://{address}:2380
            listen-client-urls: https://{address}:2379
            advertise-client-urls: https://{address}:2379
            initial-advertise-peer-urls: https://{address}:2380"""


def render_kubeadm_config(api_version: str, hostname: str, address: str, topology: EtcdTopology) -> str:
    """Render the kubeadm config that makes ``hostname`` one of the three etcd members.

    The API version is used as given; defaulting is the caller's job.
    """
    initial_cluster = ",".join(
        f"{member.hostname}=https://{member.address}:2380" for member in topology.members
    )
    return ETCD_KUBEADM_TEMPLATE.format(
        api_version=api_version,
        address=address,
        initial_cluster=initial_cluster,
        hostname=hostname,
    )
