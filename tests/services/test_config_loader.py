import pytest

from dbsetup.errors import SetupError
from dbsetup.services.config_loader import ConfigLoader


def test_config_loader_reads_supported_keys(tmp_path):
    config_path = tmp_path / ".dbsetup.yml"
    config_path.write_text(
        "provider: neon\nenv_path: .env.local\nvariable_name: POSTGRES_URL\nverbose: true\n",
        encoding="utf-8",
    )

    loaded = ConfigLoader().load(str(config_path))

    assert loaded == {
        "provider": "neon",
        "env_path": ".env.local",
        "variable_name": "POSTGRES_URL",
        "verbose": True,
    }


def test_config_loader_returns_empty_without_path():
    assert ConfigLoader().load(None) == {}


def test_config_loader_empty_file_is_empty_config(tmp_path):
    config_path = tmp_path / "config.yml"
    config_path.write_text("", encoding="utf-8")

    assert ConfigLoader().load(str(config_path)) == {}


def test_config_loader_rejects_missing_file(tmp_path):
    with pytest.raises(SetupError, match="Config file not found"):
        ConfigLoader().load(str(tmp_path / "missing.yml"))


def test_config_loader_rejects_unknown_keys(tmp_path):
    config_path = tmp_path / "config.yml"
    config_path.write_text("provider: neon\nregion: eu\n", encoding="utf-8")

    with pytest.raises(SetupError, match="Unknown configuration keys: region"):
        ConfigLoader().load(str(config_path))


def test_config_loader_rejects_non_mapping_root(tmp_path):
    config_path = tmp_path / "config.yml"
    config_path.write_text("- neon\n- render\n", encoding="utf-8")

    with pytest.raises(SetupError, match="YAML mapping"):
        ConfigLoader().load(str(config_path))


def test_config_loader_rejects_invalid_yaml(tmp_path):
    config_path = tmp_path / "config.yml"
    config_path.write_text("provider: [neon\n", encoding="utf-8")

    with pytest.raises(SetupError, match="Invalid config file"):
        ConfigLoader().load(str(config_path))


def test_config_loader_rejects_unknown_provider(tmp_path):
    config_path = tmp_path / "config.yml"
    config_path.write_text("provider: aiven\n", encoding="utf-8")

    with pytest.raises(SetupError, match="Invalid provider 'aiven'"):
        ConfigLoader().load(str(config_path))
