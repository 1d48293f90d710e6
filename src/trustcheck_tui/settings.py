"""User settings.

Settings live in ~/.trustcheck-tui/settings.yaml:

    version: "1.0"
    request:
      endpoint: https://eregos.com/api/early
      query_field: query
      credential_env: API_KEY
      timeout: null
    display:
      title: Website check
      accent: color(36)
      spinner: monkey
      after_result: single-shot
    logging:
      file: debug.log
      level: DEBUG

The credential itself is never written to the file; it is read once from
the environment variable named by credential_env (a .env file in the
working directory is loaded first).

Values are validated when settings are built, so a bad colour or spinner
name is reported at startup instead of on the first frame that uses it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator
from rich.color import Color, ColorParseError
from rich.spinner import Spinner

from .client import DEFAULT_ENDPOINT, ClientConfig
from .controller import ControllerOptions
from .state import AfterResultPolicy
from .styles import DEFAULT_ACCENT, StyleConfig


def settings_path() -> Path:
    """Location of the settings file."""
    return Path.home() / ".trustcheck-tui" / "settings.yaml"


class Settings(BaseModel):
    """Flattened view of the settings file.

    Raises:
        pydantic.ValidationError: On construction, for any invalid value
    """

    # Request
    endpoint: str = DEFAULT_ENDPOINT
    query_field: str = "query"
    credential_env: str = "API_KEY"
    timeout: float | None = None

    # Display
    title: str = "Website check"
    accent: str = DEFAULT_ACCENT
    spinner: str = "monkey"
    after_result: AfterResultPolicy = AfterResultPolicy.SINGLE_SHOT

    # Logging
    log_file: str = "debug.log"
    log_level: str = "DEBUG"

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return value

    @field_validator("accent")
    @classmethod
    def check_accent(cls, value: str) -> str:
        try:
            Color.parse(value)
        except ColorParseError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("spinner")
    @classmethod
    def check_spinner(cls, value: str) -> str:
        try:
            Spinner(value)
        except KeyError as e:
            raise ValueError(f"no spinner called {value!r}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        # getLevelName maps known names to their number, unknown ones to a string
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Settings:
        """Build settings from the nested YAML structure. Missing keys keep defaults."""
        data = data or {}
        request = data.get("request") or {}
        display = data.get("display") or {}
        logging_ = data.get("logging") or {}

        values: dict[str, Any] = {
            "endpoint": request.get("endpoint"),
            "query_field": request.get("query_field"),
            "credential_env": request.get("credential_env"),
            "timeout": request.get("timeout"),
            "title": display.get("title"),
            "accent": display.get("accent"),
            "spinner": display.get("spinner"),
            "after_result": display.get("after_result"),
            "log_file": logging_.get("file"),
            "log_level": logging_.get("level"),
        }
        return cls.model_validate({k: v for k, v in values.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        """Nested structure for writing back to YAML."""
        return {
            "version": "1.0",
            "request": {
                "endpoint": self.endpoint,
                "query_field": self.query_field,
                "credential_env": self.credential_env,
                "timeout": self.timeout,
            },
            "display": {
                "title": self.title,
                "accent": self.accent,
                "spinner": self.spinner,
                "after_result": self.after_result.value,
            },
            "logging": {
                "file": self.log_file,
                "level": self.log_level,
            },
        }

    def override(self, **changes: Any) -> Settings:
        """Copy with non-None changes applied (command-line options win).

        The copy is validated like a freshly loaded file.
        """
        known = type(self).model_fields
        updates = {k: v for k, v in changes.items() if v is not None and k in known}
        return type(self).model_validate({**self.model_dump(), **updates})

    def client_config(self, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Client configuration, with the credential resolved from the environment."""
        environ = os.environ if environ is None else environ
        return ClientConfig(
            endpoint=self.endpoint,
            credential=environ.get(self.credential_env) or None,
            query_field=self.query_field,
            timeout=self.timeout,
        )

    def controller_options(self) -> ControllerOptions:
        return ControllerOptions(
            title=self.title,
            spinner=self.spinner,
            after_result=self.after_result,
            styles=StyleConfig(accent=self.accent),
        )


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from disk, falling back to defaults if there is no file.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If a value is invalid
    """
    path = path or settings_path()
    if not path.exists():
        return Settings()
    with open(path) as f:
        return Settings.from_dict(yaml.safe_load(f))


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to disk, creating the directory if needed."""
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)
    return path
