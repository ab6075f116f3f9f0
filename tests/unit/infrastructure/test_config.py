"""Configuration loading, templating and context override tests."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from user_registry.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    UsersConfig,
)
from user_registry.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from user_registry.runtime.context import get_config, with_context


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return path


class TestSubstituteEnvVars:
    def test_default_used_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("age: ${MIN_AGE:-18}") == "age: 18"

    def test_environment_value_wins(self):
        with patch.dict(os.environ, {"MIN_AGE": "21"}, clear=True):
            assert substitute_env_vars("age: ${MIN_AGE:-18}") == "age: 21"

    def test_required_variable_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DATABASE_URL"):
                substitute_env_vars("url: ${DATABASE_URL}")

    def test_required_variable_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="set the database"):
                substitute_env_vars("url: ${DATABASE_URL:?set the database}")


class TestLoadTemplatedYaml:
    def test_loads_defaults_from_template(self, tmp_path):
        path = _write_config(
            tmp_path,
            """
config:
  database:
    url: ${DATABASE_URL:-sqlite:///./users.db}
  users:
    min_age_for_registration: ${MIN_AGE_FOR_REGISTRATION:-18}
""",
        )
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path)

        assert config.database.url == "sqlite:///./users.db"
        assert config.users.min_age_for_registration == 18
        assert config.logging.level == "INFO"

    def test_environment_overrides_age_floor(self, tmp_path):
        path = _write_config(
            tmp_path,
            "config:\n  users:\n    min_age_for_registration: ${MIN_AGE_FOR_REGISTRATION:-18}\n",
        )
        with patch.dict(os.environ, {"MIN_AGE_FOR_REGISTRATION": "21"}, clear=True):
            config = load_templated_yaml(path)

        assert config.users.min_age_for_registration == 21

    def test_environment_prefixed_variables(self, tmp_path):
        path = _write_config(tmp_path, "config:\n  database:\n    url: ${DATABASE_URL:-sqlite://}\n")
        env = {
            "APP_ENVIRONMENT": "test",
            "TEST_DATABASE_URL": "sqlite:///./test.db",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(path)

        assert config.database.url == "sqlite:///./test.db"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_templated_yaml(tmp_path / "absent.yaml")
        assert config == ConfigData()

    def test_empty_file_is_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(_write_config(tmp_path, ""))

    def test_malformed_yaml_is_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(_write_config(tmp_path, "config: [unclosed"))

    def test_negative_age_floor_is_rejected(self, tmp_path):
        path = _write_config(
            tmp_path, "config:\n  users:\n    min_age_for_registration: -1\n"
        )
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_repository_config_file_is_valid(self):
        root_config = Path(__file__).resolve().parents[3] / "config.yaml"
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(root_config)

        assert config.users.min_age_for_registration == 18
        assert config.logging.file is None


class TestDatabaseConfig:
    @pytest.mark.parametrize(
        "url, is_sqlite, is_in_memory",
        [
            ("sqlite://", True, True),
            ("sqlite:///:memory:", True, True),
            ("sqlite:///./users.db", True, False),
            ("postgresql://user@localhost/users", False, False),
        ],
    )
    def test_url_classification(self, url, is_sqlite, is_in_memory):
        config = DatabaseConfig(url=url)
        assert config.is_sqlite is is_sqlite
        assert config.is_in_memory is is_in_memory


class TestContext:
    def test_with_context_overrides_only_set_fields(self):
        original = get_config()
        override = ConfigData(users=UsersConfig(min_age_for_registration=21))

        with with_context(override):
            config = get_config()
            assert config.users.min_age_for_registration == 21
            assert config.database.url == original.database.url

        assert get_config() == original

    def test_with_context_none_is_noop(self):
        original = get_config()
        with with_context(None):
            assert get_config() == original

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"users": {}}):  # type: ignore[arg-type]
                pass
