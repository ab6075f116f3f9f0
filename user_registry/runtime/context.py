import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel

from user_registry.runtime.config.config_data import ConfigData
from user_registry.runtime.config.config_template import load_templated_yaml


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


# Loaded once per process; the age floor and database URL never change afterwards
_default_config = load_templated_yaml(Path(os.getenv("APP_CONFIG_FILE", "config.yaml")))
_default_context = AppContext(config=_default_config)


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context."""
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Dump only explicitly set fields, descending into nested models.

    A nested model is included whole if any field below it was set.
    """
    result = {}
    explicitly_set_fields = model.model_fields_set

    for field_name in type(model).model_fields:
        field_value = getattr(model, field_name)

        if isinstance(field_value, BaseModel):
            nested_result = _recursive_model_dump_exclude_unset(field_value)
            if nested_result or field_name in explicitly_set_fields:
                result[field_name] = nested_result or field_value.model_dump()
        elif field_name in explicitly_set_fields:
            result[field_name] = field_value

    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge ``override_dict`` into a copy of ``base_dict``."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge explicitly set fields of ``override_config`` over ``base_config``."""
    base_dict = base_config.model_dump()
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Temporarily override the application configuration.

    Only fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited.

    Example:
        override = ConfigData(users=UsersConfig(min_age_for_registration=21))
        with with_context(override):
            assert get_config().users.min_age_for_registration == 21
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
