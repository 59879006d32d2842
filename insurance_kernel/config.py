"""
Kernel settings (``insurance_kernel.config``).

Responsibility
--------------
Loads the runtime settings (database URL, pool sizing, logging level,
cascade policy) from an optional YAML file and applies environment
overrides on top.

Resolution order (last wins)
----------------------------
1. Dataclass defaults.
2. YAML file given to ``load_settings(path)`` or named by ``INSURANCE_CONFIG``.
3. ``INSURANCE_DATABASE_URL``, ``INSURANCE_LOG_LEVEL``,
   ``INSURANCE_STRICT_CASCADE`` environment variables.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys in the YAML mapping  -> ``ValueError``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

# Project root (parent of insurance_kernel/)
ROOT = Path(__file__).resolve().parent.parent

DEFAULT_DB_URL = f"sqlite:///{ROOT / 'insurance.db'}"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class KernelSettings:
    """Immutable runtime settings for the kernel and its API."""

    database_url: str = DEFAULT_DB_URL
    echo_sql: bool = False
    log_level: str = "INFO"
    pool_size: int = 20
    max_overflow: int = 10
    # Raise instead of logging when a delete cascade persists fewer
    # contracts than it end-dated.
    strict_cascade: bool = False


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_settings(data: dict[str, Any]) -> KernelSettings:
    """Build KernelSettings from a mapping, rejecting unknown keys."""
    known = {f.name for f in fields(KernelSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings keys: {', '.join(unknown)}")
    return KernelSettings(**data)


def _apply_env(settings: KernelSettings) -> KernelSettings:
    overrides: dict[str, Any] = {}
    if url := os.environ.get("INSURANCE_DATABASE_URL"):
        overrides["database_url"] = url
    if level := os.environ.get("INSURANCE_LOG_LEVEL"):
        overrides["log_level"] = level.upper()
    if strict := os.environ.get("INSURANCE_STRICT_CASCADE"):
        overrides["strict_cascade"] = strict.strip().lower() in _TRUTHY
    return replace(settings, **overrides) if overrides else settings


def load_settings(path: Path | str | None = None) -> KernelSettings:
    """
    Resolve the active settings.

    Args:
        path: Optional YAML file.  Falls back to ``INSURANCE_CONFIG``.

    Returns:
        KernelSettings with environment overrides applied.
    """
    if path is None:
        path = os.environ.get("INSURANCE_CONFIG")
    settings = parse_settings(load_yaml_file(Path(path))) if path else KernelSettings()
    return _apply_env(settings)
