from pathlib import Path
from typing import Any, Dict

import yaml

from ..alerts.alert_models import AlertRules

DEFAULT_CONFIG_PATH = Path("comexwatch.config.yaml")
DEFAULT_SQLITE_PATH = "comexwatch.db"

_ALERT_RULE_FIELDS = ("demurrage_window_days", "demurrage_high_days", "payment_due_soon_days")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def load_alert_rules_config(
    path: Path | None = None,
    config: Dict[str, Any] | None = None,
) -> AlertRules:
    """
    Load the alert day windows, falling back to defaults.

    Args:
        path: Optional path to the config file. Defaults to comexwatch.config.yaml
        config: Already loaded config dict. Takes precedence over path.

    Returns:
        AlertRules with the ``alerts`` section merged over the defaults

    Raises:
        ValueError: If the alerts section is malformed or a window is invalid
    """
    if config is None:
        try:
            config = load_config(path)
        except FileNotFoundError:
            return AlertRules()

    section = config.get("alerts") or {}
    if not isinstance(section, dict):
        raise ValueError("'alerts' config section must be a dictionary")

    values = {}
    for field in _ALERT_RULE_FIELDS:
        if field not in section:
            continue
        value = section[field]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"alerts.{field} must be an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"alerts.{field} must not be negative")
        values[field] = value

    rules = AlertRules(**values)
    if rules.demurrage_high_days > rules.demurrage_window_days:
        raise ValueError(
            "alerts.demurrage_high_days must not exceed alerts.demurrage_window_days"
        )
    return rules


def get_storage_path(config: Dict[str, Any] | None = None) -> str:
    """SQLite path from ``storage.sqlite_path``."""
    if not config:
        return DEFAULT_SQLITE_PATH
    return (config.get("storage") or {}).get("sqlite_path", DEFAULT_SQLITE_PATH)


def get_log_level(config: Dict[str, Any] | None = None) -> str:
    if not config:
        return "INFO"
    return str((config.get("logging") or {}).get("level", "INFO"))
