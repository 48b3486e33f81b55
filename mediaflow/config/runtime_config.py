"""Runtime configuration registry.

Provides centralized configuration for engine modes, the workspace and the
job queue. Environment variables take precedence over YAML config.

Usage:
    from mediaflow.config.runtime_config import get_engine_mode, get_workspace_root

    mode = get_engine_mode()  # Returns "stub" or "local"
    root = get_workspace_root()
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).parent / "runtime.yaml"
_cached_config: Optional[Dict[str, Any]] = None

VALID_ENGINE_MODES = ("stub", "local")

DEFAULT_WORKSPACE_ROOT = ".mediaflow/workspace"
DEFAULT_JOB_WORKERS = 2


def _load_config() -> Dict[str, Any]:
    """Load runtime.yaml configuration, with caching."""
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH, encoding="utf-8") as f:
            _cached_config = yaml.safe_load(f) or {}
    else:
        _cached_config = _default_config()

    return _cached_config


def _default_config() -> Dict[str, Any]:
    """Return default configuration if runtime.yaml doesn't exist."""
    return {
        "version": "1.0",
        "engines": {
            "execute": {"mode": "stub", "timeout_seconds": 3600},
        },
        "defaults": {
            "workspace_root": DEFAULT_WORKSPACE_ROOT,
            "job_workers": DEFAULT_JOB_WORKERS,
            "job_timeout_seconds": None,
            "rollback_on_relocation_failure": True,
        },
    }


def reset_config() -> None:
    """Reset cached config (for testing)."""
    global _cached_config
    _cached_config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default setting value.

    Args:
        key: Setting key (e.g., "job_workers", "workspace_root").
        fallback: Value to return if key not found.
    """
    config = _load_config()
    defaults = config.get("defaults") or {}
    value = defaults.get(key)
    return fallback if value is None else value


def _engine_config(engine: str) -> Dict[str, Any]:
    engines = _load_config().get("engines") or {}
    return engines.get(engine, {}) or {}


def get_engine_mode() -> str:
    """Get the execution engine mode.

    Precedence (highest to lowest):
    1. MEDIAFLOW_ENGINE_MODE
    2. engines.execute.mode in runtime.yaml
    3. Default: "stub"

    Invalid values log a warning and fall back to "stub".
    """
    value = os.environ.get("MEDIAFLOW_ENGINE_MODE")
    source = "MEDIAFLOW_ENGINE_MODE"
    if not value:
        value = _engine_config("execute").get("mode")
        source = "runtime.yaml"
    if not value:
        return "stub"

    mode = str(value).lower()
    if mode not in VALID_ENGINE_MODES:
        logger.warning(
            "Invalid engine mode '%s' from %s (valid: %s). Falling back to 'stub'.",
            value,
            source,
            ", ".join(VALID_ENGINE_MODES),
        )
        return "stub"
    return mode


def is_stub_mode() -> bool:
    return get_engine_mode() == "stub"


def get_execute_timeout_seconds() -> Optional[int]:
    """Timeout for a single local execution, None for no limit."""
    value = _engine_config("execute").get("timeout_seconds")
    return int(value) if value else None


def get_workspace_root() -> Path:
    """Get the workspace root directory.

    Precedence: MEDIAFLOW_WORKSPACE_ROOT, then defaults.workspace_root.
    """
    value = os.environ.get("MEDIAFLOW_WORKSPACE_ROOT") or get_default(
        "workspace_root", DEFAULT_WORKSPACE_ROOT
    )
    return Path(value).expanduser()


def get_job_workers() -> int:
    """Get the number of job queue worker threads (at least 1)."""
    raw = os.environ.get("MEDIAFLOW_JOB_WORKERS") or get_default(
        "job_workers", DEFAULT_JOB_WORKERS
    )
    try:
        workers = int(raw)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid job_workers value '%s'. Falling back to %d.", raw, DEFAULT_JOB_WORKERS
        )
        return DEFAULT_JOB_WORKERS
    if workers < 1:
        logger.warning("job_workers must be at least 1, got %d. Using 1.", workers)
        return 1
    return workers


def get_job_timeout_seconds() -> Optional[float]:
    """Get the job barrier timeout, None to wait until jobs finish."""
    raw = os.environ.get("MEDIAFLOW_JOB_TIMEOUT") or get_default("job_timeout_seconds")
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid job timeout '%s'. Waiting without timeout.", raw)
        return None
    return timeout if timeout > 0 else None


def is_rollback_on_relocation_failure() -> bool:
    """Whether a failed relocation removes the element from the work item again."""
    return bool(get_default("rollback_on_relocation_failure", True))
