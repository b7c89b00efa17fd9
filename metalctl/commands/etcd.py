"""
etcd bootstrap plan commands.
"""
import json
from pathlib import Path
from typing import List, Optional

import typer
import yaml

from metalctl.modules.etcd import EtcdMember, EtcdTopology, plan as build_plan

app = typer.Typer(help="Plan etcd cluster bootstrap")


def _load_topology(file: Path) -> EtcdTopology:
    with open(file, "r") as f:
        data = yaml.safe_load(f) or {}
    return EtcdTopology.from_dict(data)


@app.command()
def plan(
    file: Optional[Path] = typer.Argument(None, help="Topology file (YAML or JSON)"),
    hostname: List[str] = typer.Option([], "--hostname", "-n", help="Member hostname, repeat three times"),
    address: List[str] = typer.Option([], "--address", "-a", help="Member address, repeat three times"),
    init_ca: bool = typer.Option(False, "--init-ca", help="Generate a new etcd certificate authority first"),
    api_version: str = typer.Option("", "--api-version", help="kubeadm API version (default v1beta1)"),
    output: str = typer.Option("json", "--output", "-o", help="Output format: json or yaml"),
):
    """Print the ordered action plan that bootstraps a three node etcd cluster."""
    try:
        if file:
            topology = _load_topology(file)
            if init_ca:
                topology.init_ca = True
            if api_version:
                topology.api_version = api_version
        else:
            if len(hostname) != len(address):
                raise ValueError("Each --hostname needs a matching --address")
            topology = EtcdTopology(
                members=[EtcdMember(h, a) for h, a in zip(hostname, address)],
                init_ca=init_ca,
                api_version=api_version,
            )
    except (OSError, ValueError, KeyError, yaml.YAMLError) as e:
        typer.echo(f"❌ Invalid topology: {e}", err=True)
        raise typer.Exit(1)

    actions = [a.to_dict() for a in build_plan(topology)]
    if output == "yaml":
        typer.echo(yaml.safe_dump(actions, default_flow_style=False, sort_keys=False))
    else:
        typer.echo(json.dumps(actions, indent=2))
