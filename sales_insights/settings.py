"""Runtime configuration loaded from ``settings.yaml``."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

SETTINGS_ENV_VAR = "SALES_INSIGHTS_SETTINGS"
DEFAULT_SETTINGS_PATH = "settings.yaml"

DEFAULT_COLUMN_TOKENS: Mapping[str, Tuple[str, ...]] = {
    "date": ("fecha",),
    "product": ("producto",),
    "sales": ("ventas",),
}

DEFAULT_EXTENSIONS: Mapping[str, str] = {
    ".csv": "csv",
    ".xlsx": "excel",
    ".xls": "excel",
}


@dataclass(frozen=True)
class Settings:
    """Pipeline and UI settings.

    Attributes
    ----------
    column_tokens : Mapping[str, Tuple[str, ...]]
        Header substrings per field role (``date``, ``product``, ``sales``).
    extensions : Mapping[str, str]
        Accepted file suffix to decoder name (``"csv"`` or ``"excel"``).
    message_timeout_seconds : float
        Seconds before a message on the message surface is dismissed.
    missing_product_label : str
        Product name used for rows whose product cell is blank.
    log_level : str
        Level passed to :func:`sales_insights.logging_setup.setup_logging`.
    """

    column_tokens: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_COLUMN_TOKENS))
    extensions: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_EXTENSIONS))
    message_timeout_seconds: float = 10.0
    missing_product_label: str = "Sin producto"
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Settings":
        """Build settings from a parsed YAML mapping, keeping defaults for absent keys."""

        data = data or {}
        kwargs: Dict[str, Any] = {}
        if "column_tokens" in data:
            tokens = dict(DEFAULT_COLUMN_TOKENS)
            for role, value in (data["column_tokens"] or {}).items():
                if role not in DEFAULT_COLUMN_TOKENS:
                    raise ValueError(f"Rol de columna desconocido: {role}")
                values = (value,) if isinstance(value, str) else tuple(value)
                if not values:
                    raise ValueError(f"El rol {role} necesita al menos un token.")
                tokens[role] = tuple(str(v).lower() for v in values)
            kwargs["column_tokens"] = tokens
        if "extensions" in data:
            extensions = {}
            for suffix, source in (data["extensions"] or {}).items():
                if source not in ("csv", "excel"):
                    raise ValueError(f"Formato desconocido para {suffix}: {source}")
                suffix = str(suffix).lower()
                extensions[suffix if suffix.startswith(".") else f".{suffix}"] = source
            kwargs["extensions"] = extensions
        if "message_timeout_seconds" in data:
            kwargs["message_timeout_seconds"] = float(data["message_timeout_seconds"])
        if "missing_product_label" in data:
            kwargs["missing_product_label"] = str(data["missing_product_label"])
        if "log_level" in data:
            kwargs["log_level"] = str(data["log_level"]).upper()
        return cls(**kwargs)


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from YAML, falling back to defaults when the file is absent."""

    path = path or os.getenv(SETTINGS_ENV_VAR) or DEFAULT_SETTINGS_PATH
    file_path = Path(path)
    if not file_path.exists():
        return Settings()
    with open(file_path, "r", encoding="utf-8") as fp:
        return Settings.from_mapping(yaml.safe_load(fp))
