from __future__ import annotations

import os
from dataclasses import dataclass

from src.constants import DEFAULT_LOG_LEVEL, DEFAULT_PARALLEL_FILES

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ApexDocConfig:
    multi_param: bool
    parallel_files: int
    log_level: str


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower().strip() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_apexdoc_config() -> ApexDocConfig:
    """Return extractor settings after loading environment variables.

    A ``.env`` file is loaded first; real environment variables win over it.
    Empty values are treated as absent.
    """
    from dotenv import find_dotenv, load_dotenv

    try:
        env_path = find_dotenv(usecwd=True) or find_dotenv()
    except Exception:
        env_path = ""
    load_dotenv(dotenv_path=env_path if env_path else None, override=False)

    return ApexDocConfig(
        multi_param=_env_flag("APEXDOC_MULTI_PARAM"),
        parallel_files=_env_int("APEXDOC_PARALLEL_FILES", DEFAULT_PARALLEL_FILES),
        log_level=os.getenv("APEXDOC_LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL,
    )
