"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local overrides (gitignored)
  4. Environment variables        — ``RISK_REPORT_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The report generator and CLI commands receive an ``AppConfig`` instance,
never raw dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ReportConfig(BaseModel):
    """Report content and output settings."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/reports"
    filename_prefix: str = "risk_assessment"
    portfolio_value: float = 100_000.0
    title: str = "COMPREHENSIVE RISK ASSESSMENT REPORT"
    subtitle: str = "Professional Investment Risk Analysis"
    footer_text: str = "Confidential - Risk Assessment Report"
    author: str = "Risk Assessment Engine"

    @field_validator("portfolio_value")
    @classmethod
    def validate_portfolio_value(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"portfolio_value must be positive, got {v}.")
        return v


class LayoutConfig(BaseModel):
    """Page geometry (millimetres) and chart scaling."""

    model_config = ConfigDict(frozen=True)

    page_width: float = 210.0
    page_height: float = 297.0
    margin: float = 20.0
    loss_bar_scale: float = 2.0       # mm of bar per 1% loss
    allocation_bar_scale: float = 1.2  # mm of bar per 1% allocation

    @model_validator(mode="after")
    def validate_geometry(self) -> "LayoutConfig":
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError("page_width and page_height must be positive.")
        if not 0 <= self.margin < min(self.page_width, self.page_height) / 2:
            raise ValueError(f"margin {self.margin} leaves no printable area.")
        return self


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    report: ReportConfig = ReportConfig()
    layout: LayoutConfig = LayoutConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file is
            absent (e.g. a non-editable install) the built-in defaults apply.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
            config_dir = default_path.parent
        else:
            config_dir = None
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)
        config_dir = config_path.parent

    # Also merge local.toml if present (gitignored local overrides)
    if config_dir is not None and (config_dir / "local.toml").exists():
        raw = _deep_merge(raw, _read_toml(config_dir / "local.toml"))

    # 3. Apply RISK_REPORT_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply RISK_REPORT_* env vars to the raw config dict.

    Supported overrides:
      RISK_REPORT_OUTPUT_DIR       → raw["report"]["output_dir"]
      RISK_REPORT_PORTFOLIO_VALUE  → raw["report"]["portfolio_value"]
      RISK_REPORT_LOG_LEVEL        → raw["logging"]["level"]
      RISK_REPORT_DEBUG            → raw["debug"]
    """
    if output_dir := os.environ.get("RISK_REPORT_OUTPUT_DIR"):
        raw.setdefault("report", {})["output_dir"] = output_dir

    if portfolio_value := os.environ.get("RISK_REPORT_PORTFOLIO_VALUE"):
        raw.setdefault("report", {})["portfolio_value"] = portfolio_value

    if log_level := os.environ.get("RISK_REPORT_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("RISK_REPORT_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        report=ReportConfig(**raw.get("report", {})),
        layout=LayoutConfig(**raw.get("layout", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
