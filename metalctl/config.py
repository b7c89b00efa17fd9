"""Configuration management for the metalctl application."""
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration with sensible defaults."""

    # Address embedded in every iPXE URL handed to booting machines
    HTTP_ADDRESS: str = os.getenv("METALCTL_HTTP_ADDRESS", "127.0.0.1")

    # Boot any kernel/initrd/cmdline regardless of the deployment manifest
    ANY_BOOT: bool = _as_bool(os.getenv("METALCTL_ANY_BOOT", "false"))

    # YAML file listing the known boot configurations
    BOOT_CONFIGS_PATH: str = os.getenv("METALCTL_BOOT_CONFIGS", "")

    # API server
    HOST: str = os.getenv("METALCTL_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("METALCTL_PORT", "80"))
    API_KEY: str = os.getenv("METALCTL_API_KEY", "metalctl-secret")
    API_TIMEOUT: int = int(os.getenv("API_TIMEOUT", "30"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        required = {
            "METALCTL_HTTP_ADDRESS": cls.HTTP_ADDRESS,
            "METALCTL_API_KEY": cls.API_KEY,
        }
        missing = [k for k, v in required.items() if not v]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")
        if cls.BOOT_CONFIGS_PATH and not Path(cls.BOOT_CONFIGS_PATH).expanduser().exists():
            raise ValueError(f"Boot config file not found: {cls.BOOT_CONFIGS_PATH}")

    @classmethod
    def load_boot_configs(cls, path: Optional[str] = None) -> List[Dict[str, Any]]:
        """Read the boot configuration list from YAML.

        The file holds either a bare list or a mapping with a ``bootConfigs`` key.
        """
        path = path or cls.BOOT_CONFIGS_PATH
        if not path:
            return []
        with open(Path(path).expanduser(), "r") as f:
            data = yaml.safe_load(f) or []
        if isinstance(data, dict):
            data = data.get("bootConfigs", [])
        return data

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
