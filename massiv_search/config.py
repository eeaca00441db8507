"""
Scoring configuration from the environment.

Every ScoringConfig field can be overridden with an environment variable named
MASSIV_SEARCH_<FIELD>, e.g. MASSIV_SEARCH_FAVORITE_BONUS=7.5. A .env file is
read first when present.
"""

import os
from typing import Any, Dict, Mapping

import attrs
from aletk.utils import get_logger
from dotenv import load_dotenv

from massiv_search.scoring.models import ScoringConfig, ScoringConfigError, scoring_config_with


lgr = get_logger(__name__)


ENV_PREFIX = "MASSIV_SEARCH_"


def env_var_name(field_name: str) -> str:
    return f"{ENV_PREFIX}{field_name.upper()}"


def _parse_value(name: str, raw: str, field_type: Any) -> float | int:
    try:
        if field_type is int or field_type == "int":
            return int(raw)
        return float(raw)
    except ValueError:
        raise ScoringConfigError(f"{name} must be a number, got {raw!r}")


def overrides_from_env(environ: Mapping[str, str]) -> Dict[str, float | int]:
    """Collect ScoringConfig overrides from MASSIV_SEARCH_* variables in `environ`."""
    overrides: Dict[str, float | int] = {}
    for field in attrs.fields(ScoringConfig):
        name = env_var_name(field.name)
        raw = environ.get(name)
        if raw is None or not raw.strip():
            continue
        overrides[field.name] = _parse_value(name, raw.strip(), field.type)

    return overrides


def load_scoring_config(env_file: str | None = None) -> ScoringConfig:
    """Build a validated ScoringConfig from the defaults and the environment.

    Args:
        env_file: Path of a .env file to load first (default: search from the working directory)

    Raises:
        ScoringConfigError: If a value is not a number or the result breaks the tier ordering
    """
    load_dotenv(dotenv_path=env_file)
    overrides = overrides_from_env(os.environ)
    if overrides:
        lgr.info(f"Scoring config overrides from environment: {overrides}")

    return scoring_config_with(**overrides)
