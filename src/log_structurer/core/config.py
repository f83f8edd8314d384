"""Runtime configuration with environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from .models import FieldPolicy

POLICY_ENV = "LOG_STRUCTURER_POLICY"
MAX_WORKERS_ENV = "LOG_STRUCTURER_MAX_WORKERS"
LOG_LEVEL_ENV = "LOG_STRUCTURER_LOG_LEVEL"
BASE_DIR_ENV = "LOG_STRUCTURER_BASE_DIR"


@dataclass(frozen=True, slots=True)
class StructurerConfig:
    policy: FieldPolicy = FieldPolicy.STRICT
    max_workers: int | None = None
    encoding: str = "utf-8"
    decode_errors: str = "strict"


def resolve_policy(policy: FieldPolicy | str | None) -> FieldPolicy:
    """Return the explicit policy, else LOG_STRUCTURER_POLICY, else strict."""
    if isinstance(policy, FieldPolicy):
        return policy
    if policy is None:
        policy = os.getenv(POLICY_ENV) or FieldPolicy.STRICT.value
    try:
        return FieldPolicy(policy.strip().lower())
    except ValueError as exc:
        raise ValueError(f"{POLICY_ENV} must be 'strict' or 'lenient', got {policy!r}") from exc


def resolve_max_workers(max_workers: int | None) -> int:
    if max_workers is not None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        return max_workers

    env = os.getenv(MAX_WORKERS_ENV)
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError(f"{MAX_WORKERS_ENV} must be an integer") from exc
        if value < 1:
            raise ValueError(f"{MAX_WORKERS_ENV} must be >= 1")
        return value

    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)


def resolve_config(cfg: StructurerConfig | None = None) -> StructurerConfig:
    """Return config with environment overrides applied to unset values."""
    if cfg is None:
        cfg = StructurerConfig(policy=resolve_policy(None))
    return replace(cfg, max_workers=resolve_max_workers(cfg.max_workers))


def base_dir() -> Path:
    """Directory that file-reading tools are confined to."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def configure_logging() -> None:
    """Configure stderr logging; records themselves never go through logging."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
