"""Tests for configuration loading and check thresholds."""

import pytest
import yaml

from netprobe.core.config import Config
from netprobe.core.errors import ThresholdError
from netprobe.core.thresholds import CheckThresholds


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SNMP_VERSION", "SNMP_COMMUNITY", "SNMP_PORT", "SNMP_TIMEOUT", "SNMP_V3_USER",
                 "SNMP_V3_AUTH_KEY", "SNMP_V3_PRIV_KEY", "NETPROBE_DEVICE_CLASS_DIRS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_missing_file_gives_defaults(tmp_path):
    config = Config.from_yaml(str(tmp_path / "missing.yaml"))
    assert config.snmp.version == "2c"
    assert config.snmp.community == "public"
    assert "interfaces" in config.collection.capabilities
    assert config.device_classes.load_builtin


def test_load_yaml(tmp_path):
    path = tmp_path / "netprobe.yaml"
    path.write_text(
        "snmp:\n"
        "  version: 3\n"
        "  v3_username: monitor\n"
        "  timeout: 5\n"
        "collection:\n"
        "  capabilities: [interfaces, cpu]\n"
        "device_classes:\n"
        "  directories: [/opt/classes]\n"
    )
    config = Config.from_yaml(str(path))
    assert config.snmp.version == "3"
    assert config.snmp.v3_username == "monitor"
    assert config.snmp.timeout == 5
    assert config.collection.capabilities == ["interfaces", "cpu"]
    assert config.device_classes.directories == ["/opt/classes"]


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SNMP_COMMUNITY", "secret")
    monkeypatch.setenv("SNMP_PORT", "1161")
    monkeypatch.setenv("NETPROBE_DEVICE_CLASS_DIRS", "/a,/b")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    config = Config.from_yaml(str(tmp_path / "missing.yaml"))
    assert config.snmp.community == "secret"
    assert config.snmp.port == 1161
    assert config.device_classes.directories == ["/a", "/b"]
    assert config.logging.level == "DEBUG"


def test_v3_user_switches_version(tmp_path, monkeypatch):
    monkeypatch.setenv("SNMP_V3_USER", "monitor")
    config = Config.from_yaml(str(tmp_path / "missing.yaml"))
    assert config.snmp.version == "3"


def test_to_yaml(tmp_path):
    path = tmp_path / "out.yaml"
    config = Config()
    config.snmp.community = "private"
    config.to_yaml(str(path))
    data = yaml.safe_load(path.read_text())
    assert data["snmp"]["community"] == "private"
    assert Config.from_yaml(str(path)).snmp.community == "private"


def test_thresholds_from_dict():
    thresholds = CheckThresholds.from_dict({"warningMax": 80, "criticalMax": 90})
    assert thresholds.has_thresholds()
    assert not CheckThresholds().has_thresholds()
    thresholds.validate()


@pytest.mark.parametrize("values", [
    {"warning_min": 10, "warning_max": 5},
    {"critical_min": 10, "critical_max": 5},
    {"warning_min": 5, "critical_min": 10},
    {"warning_max": 95, "critical_max": 90},
])
def test_inconsistent_thresholds(values):
    with pytest.raises(ThresholdError):
        CheckThresholds(**values).validate()


def test_threshold_state():
    thresholds = CheckThresholds(warning_max=80, critical_max=90, critical_min=0)
    assert thresholds.state(50) == "ok"
    assert thresholds.state(85) == "warning"
    assert thresholds.state(95) == "critical"
    assert thresholds.state(-1) == "critical"


def test_to_yaml_keeps_every_field(tmp_path):
    path = tmp_path / "full.yaml"
    config = Config()
    config.snmp.version = "3"
    config.snmp.v3_username = "monitor"
    config.snmp.v3_auth_key = "authsecret"
    config.snmp.v3_priv_protocol = "DES"
    config.logging.format = "%(levelname)s %(message)s"
    config.logging.max_file_size_mb = 50
    config.logging.backup_count = 2
    config.device_classes.load_builtin = False

    config.to_yaml(str(path))

    assert Config.from_yaml(str(path)) == config
