"""
Deployment manifest commands.
"""
from pathlib import Path

import requests
import typer

from metalctl.config import Config
from metalctl.modules.deployment import BootConfig, DeploymentError
from metalctl.modules.deployment.service import ProvisioningService

app = typer.Typer(help="Manage deployment manifests")


def _server_url(server: str) -> str:
    return server if server.startswith("http") else f"http://{server}"


def _read_manifest(file: Path) -> str:
    if not file.exists():
        typer.echo(f"❌ Manifest not found at {file}", err=True)
        raise typer.Exit(1)
    return file.read_text()


@app.command()
def apply(
    file: Path = typer.Argument(..., help="Deployment manifest (JSON)"),
    server: str = typer.Option(Config.HTTP_ADDRESS, "--server", "-s", help="metalctl server address"),
):
    """Submit a manifest to a running metalctl server."""
    payload = _read_manifest(file)
    url = f"{_server_url(server)}/deployment"
    try:
        response = requests.post(
            url,
            data=payload,
            headers={"X-API-Key": Config.API_KEY, "Content-Type": "application/json"},
            timeout=Config.API_TIMEOUT,
        )
    except requests.RequestException as e:
        typer.echo(f"❌ Unable to reach {url}: {e}", err=True)
        raise typer.Exit(1)

    if response.status_code != 200:
        typer.echo(f"❌ Deployment rejected ({response.status_code}): {response.text}", err=True)
        raise typer.Exit(1)

    for host in response.json().get("hosts", []):
        typer.echo(f"✅ {host['mac']} -> {host['kind']}")


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Deployment manifest (JSON)"),
    boot_configs: str = typer.Option(
        Config.BOOT_CONFIGS_PATH, "--boot-configs", "-b",
        help="YAML file listing the boot configurations the manifest may reference",
    ),
):
    """Resolve a manifest locally and list the artifacts it would publish."""
    payload = _read_manifest(file)
    configs = [BootConfig.model_validate(c) for c in Config.load_boot_configs(boot_configs)]
    service = ProvisioningService(http_address=Config.HTTP_ADDRESS, boot_configs=configs)

    try:
        resolved = service.update_deployment(payload)
    except DeploymentError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    if not resolved:
        typer.echo("⚠️  Manifest has no hosts")
        return
    for r in resolved:
        paths = ", ".join(sorted(service.dispatcher.render(r)))
        typer.echo(f"✅ {r.entry.mac} [{r.kind.value}] {paths}")


@app.command()
def lookup(
    mac: str = typer.Argument(..., help="Hardware address to look up"),
    server: str = typer.Option(Config.HTTP_ADDRESS, "--server", "-s", help="metalctl server address"),
):
    """Ask a running server which profile a MAC boots with."""
    url = f"{_server_url(server)}/lookup/{mac}"
    try:
        response = requests.get(url, timeout=Config.API_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        typer.echo(f"❌ Lookup failed: {e}", err=True)
        raise typer.Exit(1)

    deployment = response.json().get("deployment")
    if not deployment:
        typer.echo(f"No deployment for {mac}")
        raise typer.Exit(1)
    typer.echo(deployment)
