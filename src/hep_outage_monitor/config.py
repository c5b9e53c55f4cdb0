# config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .utils.env_util import env_list, env_str

DEFAULT_CONFIG_PATH = "config/config.yaml"
DEFAULT_WINDOW_DAYS = 7
DEFAULT_SMTP_SERVER = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587
DEFAULT_TIMEZONE = "Europe/Zagreb"
DEFAULT_SCHEDULE = "0 7,19 * * *"


class ConfigError(ValueError):
    """Raised when the run configuration is unusable; aborts before any fetch."""


@dataclass(frozen=True)
class SmtpSettings:
    host: str = DEFAULT_SMTP_SERVER
    port: int = DEFAULT_SMTP_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    from_email: Optional[str] = None


@dataclass(frozen=True)
class MonitorConfig:
    area_code: str
    office_code: str
    window_days: int = DEFAULT_WINDOW_DAYS
    location_filter: Optional[str] = None
    dry_run: bool = False
    timezone: str = DEFAULT_TIMEZONE
    request_delay: float = 0.5
    request_timeout: float = 30.0
    schedule: str = DEFAULT_SCHEDULE
    attach_ics: bool = False
    recipients: tuple = ()
    smtp: SmtpSettings = field(default_factory=SmtpSettings)

    def with_overrides(self, **changes) -> "MonitorConfig":
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)


def load_config(path=DEFAULT_CONFIG_PATH):
    """Read the YAML config file; a missing file means an empty config."""
    if not path or not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return data


def _as_int(value, name):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _as_float(value, name):
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _recipients(raw):
    if isinstance(raw, str):
        raw = raw.split(",")
    return tuple(r.strip() for r in (raw or []) if r and r.strip())


def build_monitor_config(data: dict) -> MonitorConfig:
    """Build the immutable config from a YAML mapping merged with env overrides."""
    smtp_raw = data.get("smtp") or {}

    smtp = SmtpSettings(
        host=env_str("SMTP_SERVER", smtp_raw.get("host") or DEFAULT_SMTP_SERVER),
        port=_as_int(env_str("SMTP_PORT", smtp_raw.get("port", DEFAULT_SMTP_PORT)), "SMTP_PORT"),
        username=env_str("SMTP_USERNAME", smtp_raw.get("username")),
        password=env_str("SMTP_PASSWORD", smtp_raw.get("password")),
        from_email=env_str("FROM_EMAIL", smtp_raw.get("from_email")),
    )

    recipients = tuple(env_list("TO_EMAIL")) or _recipients(data.get("recipients"))

    area_code = env_str("HEP_CITY", data.get("area_code"))
    office_code = env_str("HEP_OFFICE", data.get("office_code"))

    return MonitorConfig(
        area_code=str(area_code).strip() if area_code is not None else "",
        office_code=str(office_code).strip() if office_code is not None else "",
        window_days=_as_int(env_str("HEP_WINDOW_DAYS", data.get("window_days", DEFAULT_WINDOW_DAYS)), "window_days"),
        location_filter=env_str("HEP_FILTER", data.get("location_filter")),
        timezone=data.get("timezone") or DEFAULT_TIMEZONE,
        request_delay=_as_float(data.get("request_delay", 0.5), "request_delay"),
        request_timeout=_as_float(data.get("request_timeout", 30), "request_timeout"),
        schedule=data.get("schedule") or DEFAULT_SCHEDULE,
        attach_ics=bool(data.get("attach_ics", False)),
        recipients=recipients,
        smtp=smtp,
    )


def validate(config: MonitorConfig) -> MonitorConfig:
    if not config.area_code:
        raise ConfigError("HEP_CITY (area_code) must be set")
    if not config.office_code:
        raise ConfigError("HEP_OFFICE (office_code) must be set")
    if config.window_days < 0:
        raise ConfigError(f"window_days must be >= 0, got {config.window_days}")
    if config.request_delay < 0:
        raise ConfigError(f"request_delay must be >= 0, got {config.request_delay}")
    try:
        ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"unknown timezone {config.timezone!r}") from None

    # email settings only matter when we actually send
    if not config.dry_run:
        missing = [
            name for name, value in (
                ("TO_EMAIL", config.recipients),
                ("FROM_EMAIL", config.smtp.from_email),
                ("SMTP_USERNAME", config.smtp.username),
                ("SMTP_PASSWORD", config.smtp.password),
            ) if not value
        ]
        if missing:
            raise ConfigError(f"{', '.join(missing)} must be set (or use --dry-run)")
    return config


def normalize_filter(pattern):
    """Strip the location filter; blank means no filter."""
    if pattern is None:
        return None
    return str(pattern).strip() or None


def load_monitor_config(path=DEFAULT_CONFIG_PATH, **overrides) -> MonitorConfig:
    """Load YAML + env, apply CLI overrides, validate. Raises ConfigError."""
    config = build_monitor_config(load_config(path)).with_overrides(**overrides)
    config = replace(config, location_filter=normalize_filter(config.location_filter))
    return validate(config)
