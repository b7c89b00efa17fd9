"""
etcd bootstrap planning.

Builds the ordered action plan that stands up a three member etcd cluster
with kubeadm issued certificates.
"""
from .models import Action, ActionKind, EtcdMember, EtcdTopology, DEFAULT_KUBEADM_API_VERSION
from .kubeadm import render_kubeadm_config
from .certificates import plan, certificate_actions

__all__ = [
    'Action',
    'ActionKind',
    'EtcdMember',
    'EtcdTopology',
    'DEFAULT_KUBEADM_API_VERSION',
    'render_kubeadm_config',
    'plan',
    'certificate_actions',
]
