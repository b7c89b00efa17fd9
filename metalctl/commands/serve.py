"""
Run the provisioning HTTP server.
"""
import typer
import uvicorn

from metalctl.config import Config


def serve(
    host: str = typer.Option(Config.HOST, "--host", help="Interface to listen on"),
    port: int = typer.Option(Config.PORT, "--port", "-p", help="Port to listen on"),
    address: str = typer.Option(
        Config.HTTP_ADDRESS, "--address", "-a",
        help="Address booting machines use to reach this server",
    ),
    boot_configs: str = typer.Option(
        Config.BOOT_CONFIGS_PATH, "--boot-configs", "-b",
        help="YAML file listing kernel/initrd/cmdline boot configurations",
    ),
    any_boot: bool = typer.Option(Config.ANY_BOOT, "--any-boot", help="Boot every machine regardless of deployment"),
):
    """Start the metalctl server."""
    Config.HTTP_ADDRESS = address
    Config.BOOT_CONFIGS_PATH = boot_configs
    Config.ANY_BOOT = any_boot
    try:
        Config.validate()
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"🚀 Serving boot artifacts for http://{address} on {host}:{port}")
    uvicorn.run("metalctl.api.main:app", host=host, port=port)
