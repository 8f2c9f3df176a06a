import pytest

from fusion_auth.config import Settings, load_settings
from fusion_auth.config import settings as settings_module
from fusion_auth.exceptions import ConfigurationError

ENV_VARS = [
    "FUSION_AUTH_URL",
    "FUSION_AUTH_API_KEY",
    "FUSION_AUTH_TENANT_ID",
    "FUSION_AUTH_APPLICATION_ID",
    "FUSION_AUTH_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Start every test with no FusionAuth variables and an empty secrets dir."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(settings_module, "SECRETS_DIR", str(tmp_path))
    return tmp_path


def test_loads_from_environment(monkeypatch):
    monkeypatch.setenv("FUSION_AUTH_URL", "http://localhost:9011")
    monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")
    monkeypatch.setenv("FUSION_AUTH_TENANT_ID", "tenant-1")
    monkeypatch.setenv("FUSION_AUTH_APPLICATION_ID", "app-1")
    monkeypatch.setenv("FUSION_AUTH_TIMEOUT", "2.5")

    assert load_settings() == Settings(
        base_url="http://localhost:9011",
        api_key="env-key",
        tenant_id="tenant-1",
        application_id="app-1",
        timeout=2.5,
    )


def test_optional_values_default_to_none(monkeypatch):
    monkeypatch.setenv("FUSION_AUTH_URL", "http://localhost:9011")
    monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")
    monkeypatch.setenv("FUSION_AUTH_TENANT_ID", "  ")

    cfg = load_settings()
    assert cfg.tenant_id is None
    assert cfg.application_id is None
    assert cfg.timeout is None


def test_api_key_prefers_secret_file(monkeypatch, clean_env):
    (clean_env / "fusion_auth_api_key").write_text("file-key\n")
    monkeypatch.setenv("FUSION_AUTH_URL", "http://localhost:9011")
    monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")

    assert load_settings().api_key == "file-key"


def test_empty_secret_file_falls_back_to_env(monkeypatch, clean_env):
    (clean_env / "fusion_auth_api_key").write_text("   ")
    monkeypatch.setenv("FUSION_AUTH_URL", "http://localhost:9011")
    monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")

    assert load_settings().api_key == "env-key"


def test_missing_url_raises(monkeypatch):
    monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")
    with pytest.raises(ConfigurationError, match="FUSION_AUTH_URL"):
        load_settings()


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.setenv("FUSION_AUTH_URL", "http://localhost:9011")
    with pytest.raises(ConfigurationError, match="FUSION_AUTH_API_KEY"):
        load_settings()


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_timeout_raises(monkeypatch, raw):
    monkeypatch.setenv("FUSION_AUTH_URL", "http://localhost:9011")
    monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")
    monkeypatch.setenv("FUSION_AUTH_TIMEOUT", raw)
    with pytest.raises(ConfigurationError, match="FUSION_AUTH_TIMEOUT"):
        load_settings()


class TestExplicitOverrides:
    def test_arguments_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("FUSION_AUTH_URL", "http://env:9011")
        monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")
        monkeypatch.setenv("FUSION_AUTH_TENANT_ID", "tenant-env")
        monkeypatch.setenv("FUSION_AUTH_TIMEOUT", "4")

        cfg = load_settings(base_url="http://cli:9011", api_key="cli-key", tenant_id="tenant-cli", timeout=1.5)

        assert cfg == Settings(
            base_url="http://cli:9011",
            api_key="cli-key",
            tenant_id="tenant-cli",
            application_id=None,
            timeout=1.5,
        )

    def test_unset_arguments_fall_back(self, monkeypatch, clean_env):
        (clean_env / "fusion_auth_api_key").write_text("file-key")
        monkeypatch.setenv("FUSION_AUTH_APPLICATION_ID", "app-env")

        cfg = load_settings(base_url="http://cli:9011")

        assert cfg.api_key == "file-key"
        assert cfg.application_id == "app-env"

    def test_empty_api_key_argument_is_rejected(self, monkeypatch):
        monkeypatch.setenv("FUSION_AUTH_API_KEY", "env-key")
        with pytest.raises(ConfigurationError, match="FUSION_AUTH_API_KEY"):
            load_settings(base_url="http://cli:9011", api_key="")

    def test_non_positive_timeout_argument_is_rejected(self):
        with pytest.raises(ConfigurationError, match="positive"):
            load_settings(base_url="http://cli:9011", api_key="k", timeout=0)
