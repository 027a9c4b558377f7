"""Configuration for a ticketlink check run."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from ticketlink.checker.patterns import DEFAULT_PATTERN, TicketPattern, get_pattern
from ticketlink.exceptions import ConfigError

DEFAULT_BYPASS_LABEL = "no-ticket"
DEFAULT_TICKET_BASE_URL = "https://app.clickup.com/t/"

# Keys accepted in a YAML config file. The token is deliberately absent.
FILE_KEYS = ("pattern", "bypass_label", "ticket_base_url", "ignore_title", "ignore_body")


@dataclass(frozen=True)
class CheckConfig:
    """Immutable configuration for one check run.

    Attributes:
        token: GitHub token used to update the pull request.
        ignore_title: Skip the title check.
        ignore_body: Read from the action inputs but not used by the check.
        pattern: Active ticket pattern family.
        bypass_label: Label that exempts a pull request from the check.
        ticket_base_url: Prefix for ticket links, the identifier is appended.
    """

    token: str = field(repr=False)
    ignore_title: bool = False
    ignore_body: bool = False
    pattern: TicketPattern = field(default_factory=lambda: get_pattern(DEFAULT_PATTERN))
    bypass_label: str = DEFAULT_BYPASS_LABEL
    ticket_base_url: str = DEFAULT_TICKET_BASE_URL

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigError("A GitHub token is required")
        if not self.bypass_label:
            raise ConfigError("The bypass label must not be empty")
        if not self.ticket_base_url:
            raise ConfigError("The ticket base URL must not be empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any], token: str) -> CheckConfig:
        """Create config from a dictionary.

        Args:
            data: Settings, typically from a YAML file. Missing keys use defaults.
            token: GitHub token.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If keys are unknown or values have the wrong type.
        """
        unknown = sorted(set(data) - set(FILE_KEYS))
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        for flag in ("ignore_title", "ignore_body"):
            if flag in data and not isinstance(data[flag], bool):
                raise ConfigError(f"'{flag}' must be true or false")
        for text in ("pattern", "bypass_label", "ticket_base_url"):
            if text in data and not isinstance(data[text], str):
                raise ConfigError(f"'{text}' must be a string")

        return cls(
            token=token,
            ignore_title=data.get("ignore_title", False),
            ignore_body=data.get("ignore_body", False),
            pattern=get_pattern(data.get("pattern", DEFAULT_PATTERN)),
            bypass_label=data.get("bypass_label", DEFAULT_BYPASS_LABEL),
            ticket_base_url=data.get("ticket_base_url", DEFAULT_TICKET_BASE_URL),
        )

    def with_overrides(self, **overrides: Any) -> CheckConfig:
        """Return a copy with the non-None overrides applied.

        A string ``pattern`` override is resolved to its pattern family.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        if isinstance(values.get("pattern"), str):
            values["pattern"] = get_pattern(values["pattern"])
        return replace(self, **values)


def read_config_file(config_path: Path | str) -> dict[str, Any]:
    """Read settings from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        The settings mapping (empty for an empty file).

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return data


def load_config(config_path: Path | str | None, token: str) -> CheckConfig:
    """Build the run configuration, optionally from a YAML file.

    Args:
        config_path: Optional path to a YAML settings file.
        token: GitHub token.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If the file or any value is invalid.
    """
    data = read_config_file(config_path) if config_path is not None else {}
    return CheckConfig.from_dict(data, token=token)
