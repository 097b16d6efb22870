"""
Configuration management for netprobe.

Loads configuration from YAML files and environment variables.
"""

import logging
import logging.handlers
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml


@dataclass
class SNMPConfig:
    """SNMP access configuration for remote devices."""

    version: str = "2c"  # 1, 2c or 3
    community: str = "public"
    port: int = 161
    timeout: float = 2.0
    retries: int = 1
    v3_username: str = ""
    v3_auth_key: str = ""
    v3_priv_key: str = ""
    v3_auth_protocol: str = "SHA"  # MD5 or SHA
    v3_priv_protocol: str = "AES"  # DES or AES


@dataclass
class CollectionConfig:
    """Which capabilities a collection run reads."""

    capabilities: List[str] = field(default_factory=lambda: [
        "properties",
        "interfaces",
        "cpu",
        "memory",
        "disk",
        "ups",
        "server",
        "sbc",
        "hardware_health",
    ])


@dataclass
class DeviceClassConfig:
    """Where device class definitions are loaded from."""

    load_builtin: bool = True
    directories: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Main configuration container."""

    snmp: SNMPConfig = field(default_factory=SNMPConfig)
    collection: CollectionConfig = field(default_factory=CollectionConfig)
    device_classes: DeviceClassConfig = field(default_factory=DeviceClassConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(path)
        if not config_path.exists():
            config = cls()
            config._apply_env_overrides()
            return config

        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        config = cls()

        if "snmp" in data:
            snmp = dict(data["snmp"])
            # YAML reads "2c" fine but 1 and 3 as integers
            if "version" in snmp:
                snmp["version"] = str(snmp["version"])
            config.snmp = SNMPConfig(**snmp)

        if "collection" in data:
            config.collection = CollectionConfig(**data["collection"])

        if "device_classes" in data:
            config.device_classes = DeviceClassConfig(**data["device_classes"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        # SNMP settings
        if os.getenv("SNMP_VERSION"):
            self.snmp.version = os.getenv("SNMP_VERSION")
        if os.getenv("SNMP_COMMUNITY"):
            self.snmp.community = os.getenv("SNMP_COMMUNITY")
        if os.getenv("SNMP_PORT"):
            self.snmp.port = int(os.getenv("SNMP_PORT"))
        if os.getenv("SNMP_TIMEOUT"):
            self.snmp.timeout = float(os.getenv("SNMP_TIMEOUT"))

        # V3 settings
        if os.getenv("SNMP_V3_USER"):
            self.snmp.version = "3"
            self.snmp.v3_username = os.getenv("SNMP_V3_USER")
        if os.getenv("SNMP_V3_AUTH_KEY"):
            self.snmp.v3_auth_key = os.getenv("SNMP_V3_AUTH_KEY")
        if os.getenv("SNMP_V3_PRIV_KEY"):
            self.snmp.v3_priv_key = os.getenv("SNMP_V3_PRIV_KEY")

        # Device classes
        if os.getenv("NETPROBE_DEVICE_CLASS_DIRS"):
            self.device_classes.directories = os.getenv("NETPROBE_DEVICE_CLASS_DIRS").split(",")

        # Logging
        if os.getenv("LOG_LEVEL"):
            self.logging.level = os.getenv("LOG_LEVEL")

    def to_yaml(self, path: str):
        """Save the complete configuration to a YAML file."""
        data = asdict(self)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    # Check common locations
    candidates = [
        Path("config/netprobe.yaml"),
        Path("netprobe.yaml"),
        Path.home() / ".netprobe" / "config.yaml",
        Path("/etc/netprobe/config.yaml"),
    ]

    for path in candidates:
        if path.exists():
            return str(path)

    # Return the first candidate as default
    return str(candidates[0])


def setup_logging(config: LoggingConfig):
    """Configure the root logger from ``config``."""
    logging.basicConfig(level=config.level.upper(), format=config.format)

    if config.file_path:
        handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger().addHandler(handler)
