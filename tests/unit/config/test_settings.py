"""Tests for multi-source settings resolution.

SettingsResolver resolves each setting from an explicit value, the
environment (including a loaded .env file) or a default, in that order.
"""

import pytest

from jsonapi_client_core.config import PaginationParams, SettingsResolver, load_delegate
from jsonapi_client_core.errors import LocalError


class TestSettingsResolverInit:
    """Test SettingsResolver initialization."""

    def test_init_default(self):
        resolver = SettingsResolver()
        assert resolver._dotenv_loaded

    def test_init_skip_dotenv(self):
        resolver = SettingsResolver(load_dotenv=False)
        assert not resolver._dotenv_loaded

    def test_init_with_custom_dotenv_path(self, tmp_path, monkeypatch):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TEST_DOTENV_VAR=from-dotenv\n")
        monkeypatch.delenv("TEST_DOTENV_VAR", raising=False)

        resolver = SettingsResolver(dotenv_path=str(dotenv_file))

        assert resolver._dotenv_loaded
        assert resolver.resolve(env_var_name="TEST_DOTENV_VAR") == "from-dotenv"


class TestSettingsResolverResolve:
    """Test single-setting resolution and priority."""

    @pytest.mark.unit
    def test_resolve_from_explicit_value(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(value="explicit") == "explicit"

    @pytest.mark.unit
    def test_resolve_from_environment_variable(self, monkeypatch):
        monkeypatch.setenv("TEST_BASE_URL", "https://env.example.com/")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_BASE_URL") == "https://env.example.com/"

    @pytest.mark.unit
    def test_explicit_value_beats_environment(self, monkeypatch):
        monkeypatch.setenv("TEST_BASE_URL", "https://env.example.com/")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(value="https://explicit/", env_var_name="TEST_BASE_URL") == "https://explicit/"

    @pytest.mark.unit
    def test_environment_beats_default(self, monkeypatch):
        monkeypatch.setenv("TEST_BASE_URL", "https://env.example.com/")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_BASE_URL", default="https://d/") == "https://env.example.com/"

    @pytest.mark.unit
    def test_resolve_default(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_MISSING", default="fallback") == "fallback"

    @pytest.mark.unit
    def test_resolve_nothing(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_MISSING") is None

    @pytest.mark.unit
    def test_secret_values_are_masked_in_logs(self, caplog):
        resolver = SettingsResolver(load_dotenv=False)

        with caplog.at_level("DEBUG", logger="jsonapi_client_core.config.settings"):
            resolver.resolve(value="super-secret-token", secret=True)

        assert "super-secret-token" not in caplog.text
        assert "***" in caplog.text


class TestSettingsResolverFile:
    """Test file-based resolution."""

    @pytest.mark.unit
    def test_resolve_from_file_path(self, tmp_path):
        token_file = tmp_path / "token"
        token_file.write_text("  file-token\n")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_from_file(file_path=token_file) == "file-token"

    @pytest.mark.unit
    def test_resolve_from_file_env_var(self, tmp_path, monkeypatch):
        token_file = tmp_path / "token"
        token_file.write_text("file-token")
        monkeypatch.setenv("TEST_TOKEN_FILE", str(token_file))
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_from_file(env_var_name="TEST_TOKEN_FILE") == "file-token"

    @pytest.mark.unit
    def test_missing_file_resolves_to_none(self, tmp_path):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_from_file(file_path=tmp_path / "absent") is None

    @pytest.mark.unit
    def test_unreadable_path_raises_local_error(self, tmp_path):
        resolver = SettingsResolver(load_dotenv=False)

        with pytest.raises(LocalError):
            resolver.resolve_from_file(file_path=tmp_path)

    @pytest.mark.unit
    def test_no_path_resolves_to_none(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_from_file(env_var_name="TEST_TOKEN_FILE") is None


class TestLoadDelegate:
    """Test building a delegate from settings."""

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("JSONAPI_BASE_URL", "https://api.example.com/v1/")
        monkeypatch.setenv("JSONAPI_ACCESS_TOKEN", "env-token")

        delegate = load_delegate(resolver=SettingsResolver(load_dotenv=False))

        assert delegate.api_endpoint == "https://api.example.com/v1/"
        assert delegate.access_token == "env-token"

    @pytest.mark.unit
    def test_token_file_fallback(self, tmp_path, monkeypatch):
        token_file = tmp_path / "token"
        token_file.write_text("file-token\n")
        monkeypatch.setenv("TEST_BASE_URL", "https://api.example.com/")
        monkeypatch.setenv("TEST_ACCESS_TOKEN_FILE", str(token_file))

        delegate = load_delegate("TEST_", resolver=SettingsResolver(load_dotenv=False))

        assert delegate.access_token == "file-token"

    @pytest.mark.unit
    def test_explicit_values_and_pagination(self):
        delegate = load_delegate(
            resolver=SettingsResolver(load_dotenv=False),
            base_url="https://explicit.example.com/",
            access_token="explicit-token",
            pagination_params=PaginationParams.PAGE_SIZE,
        )

        assert delegate.api_endpoint == "https://explicit.example.com/"
        assert delegate.access_token == "explicit-token"
        assert delegate.pagination_params == PaginationParams.PAGE_SIZE

    @pytest.mark.unit
    def test_token_is_optional(self, monkeypatch):
        monkeypatch.setenv("JSONAPI_BASE_URL", "https://api.example.com/")

        delegate = load_delegate(resolver=SettingsResolver(load_dotenv=False))

        assert delegate.access_token is None

    @pytest.mark.unit
    def test_missing_base_url(self):
        with pytest.raises(LocalError, match="JSONAPI_BASE_URL"):
            load_delegate(resolver=SettingsResolver(load_dotenv=False))
