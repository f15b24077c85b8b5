"""
Application configuration using environment variables and an optional JSON config file.

Precedence (highest first): explicit overrides (CLI flags) > environment > config file > defaults.
"""
import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from wsg_check.schemas.check_result import WSGCategory
from wsg_check.services.errors import ConfigError

# Load .env file
load_dotenv()

CONFIG_FILE_NAMES = ("wsg-check.config.json", ".wsgcheckrc.json")
OUTPUT_FORMATS = ("terminal", "json", "markdown", "html")


@dataclass
class Settings:
    """Application settings."""
    APP_NAME: str = "WSG Check"
    VERSION: str = "0.1.0"

    # HTTP client settings
    TIMEOUT: float = 30.0
    USER_AGENT: str = "Mozilla/5.0 (compatible; wsg-check/0.1.0)"
    FOLLOW_REDIRECTS: bool = True
    MAX_RETRIES: int = 2
    RETRY_DELAY: float = 0.5
    RESPECT_ROBOTS: bool = True
    BLOCK_PRIVATE_NETWORKS: bool = False

    # Check selection
    CATEGORIES: List[str] = field(default_factory=lambda: [c.value for c in WSGCategory])
    GUIDELINES: List[str] = field(default_factory=list)
    EXCLUDE_GUIDELINES: List[str] = field(default_factory=list)

    # Output
    FORMAT: str = "terminal"
    FAIL_THRESHOLD: int = 0
    VERBOSE: bool = False

    # Green Web Foundation
    GREEN_CHECK_URL: str = "https://api.thegreenwebfoundation.org/api/v3/greencheck"
    GREEN_CHECK_TIMEOUT: float = 10.0


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def _coerce(name: str, value: Any, target: Any) -> Any:
    """Coerce a raw env / file value to the type of the settings field."""
    try:
        if isinstance(target, bool):
            return _parse_bool(value) if isinstance(value, str) else bool(value)
        if isinstance(target, int):
            return int(value)
        if isinstance(target, float):
            return float(value)
        if isinstance(target, list):
            return _split_list(value) if isinstance(value, str) else [str(v) for v in value]
        return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}", name) from e


def _from_env() -> Dict[str, Any]:
    """Read WSG_* environment variables that are set."""
    values = {}
    for f in fields(Settings):
        raw = os.getenv(f"WSG_{f.name}")
        if raw is not None and raw != "":
            values[f.name] = raw
    return values


def _from_file(config_dir: Optional[str]) -> Dict[str, Any]:
    """Load the first config file found in config_dir (keys are case-insensitive field names)."""
    directory = Path(config_dir) if config_dir else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        path = directory / name
        if path.is_file():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
            if not isinstance(raw, dict):
                raise ConfigError(f"Config file {path} must contain a JSON object")
            return {key.upper().replace("-", "_"): value for key, value in raw.items()}
    return {}


def _validate(s: Settings) -> Settings:
    known = {c.value for c in WSGCategory}
    unknown = [c for c in s.CATEGORIES if c not in known]
    if unknown:
        raise ConfigError(f"Unknown categories: {', '.join(unknown)}", "CATEGORIES")
    if not 0 <= s.FAIL_THRESHOLD <= 100:
        raise ConfigError(f"FAIL_THRESHOLD must be between 0 and 100, got {s.FAIL_THRESHOLD}", "FAIL_THRESHOLD")
    if s.FORMAT not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format: {s.FORMAT}", "FORMAT")
    if s.TIMEOUT <= 0:
        raise ConfigError("TIMEOUT must be positive", "TIMEOUT")
    return s


def load_settings(overrides: Optional[Dict[str, Any]] = None, config_dir: Optional[str] = None) -> Settings:
    """Merge defaults, config file, environment and overrides into a Settings instance."""
    defaults = Settings()
    merged: Dict[str, Any] = {}
    for source in (_from_file(config_dir), _from_env(), overrides or {}):
        for key, value in source.items():
            name = key.upper()
            if value is None or not hasattr(defaults, name):
                continue
            merged[name] = _coerce(name, value, getattr(defaults, name))
    return _validate(Settings(**merged))


settings = load_settings()
