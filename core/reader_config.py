"""Reader configuration loading and validation.

Settings come from three layers, later ones winning: built-in defaults,
an optional YAML/JSON config file, and environment variables (a ``.env``
file is honoured through python-dotenv).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from extraction.models import ReaderConfig

logger = logging.getLogger(__name__)

ENV_ONLY_COMMENTS = "ACE_READER_ONLY_COMMENTS"
ENV_MAX_CONCURRENT_READS = "ACE_READER_MAX_CONCURRENT_READS"


class ConfigValidationError(RuntimeError):
    """Raised when strict config validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _fail(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; continuing with defaults", msg)


def _load_config_payload(path: str, strict: bool) -> dict[str, Any]:
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if strict:
            raise ConfigValidationError(f"Config file not found: {path}") from exc
        logger.warning("Config file not found: %s; continuing with defaults", path)
        return {}

    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"Failed to parse config at {path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        _fail(f"Config file is empty: {path}", strict)
        return {}
    if not isinstance(payload, dict):
        _fail(f"Unexpected config payload type: {type(payload).__name__}", strict)
        return {}
    return payload


def _parse_extensions(raw: Any, strict: bool) -> Optional[tuple[str, ...]]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw:
        _fail("extensions must be a non-empty list", strict)
        return None

    extensions: list[str] = []
    for item in raw:
        ext = str(item).strip()
        if not ext or ext == ".":
            _fail("extensions contains an empty entry", strict)
            return None
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(extensions)


def _parse_positive_int(raw: Any, key: str, strict: bool) -> Optional[int]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        _fail(f"{key} must be an integer, got {raw!r}", strict)
        return None
    if value < 1:
        _fail(f"{key} must be >= 1, got {value}", strict)
        return None
    return value


def parse_reader_config(
    payload: dict[str, Any],
    base: Optional[ReaderConfig] = None,
    strict: bool = False,
) -> ReaderConfig:
    """Apply a config payload on top of ``base`` (defaults when omitted)."""
    config = base or ReaderConfig()
    updates: dict[str, Any] = {}

    if "only_comments" in payload:
        updates["only_comments"] = bool(payload["only_comments"])

    if "function_name_prefix" in payload:
        name_prefix = str(payload["function_name_prefix"]).strip()
        if name_prefix:
            updates["function_name_prefix"] = name_prefix
        else:
            _fail("function_name_prefix must not be empty", strict)

    if "extensions" in payload:
        extensions = _parse_extensions(payload["extensions"], strict)
        if extensions is not None:
            updates["extensions"] = extensions

    if "max_concurrent_reads" in payload:
        limit = _parse_positive_int(
            payload["max_concurrent_reads"], "max_concurrent_reads", strict
        )
        if limit is not None:
            updates["max_concurrent_reads"] = limit

    unknown = sorted(set(payload) - set(ReaderConfig.__dataclass_fields__))
    if unknown:
        _fail(f"Unknown config keys: {', '.join(unknown)}", strict)

    return replace(config, **updates)


def apply_env_overrides(config: ReaderConfig, strict: bool = False) -> ReaderConfig:
    """Override config values from ``ACE_READER_*`` environment variables."""
    updates: dict[str, Any] = {}
    if os.getenv(ENV_ONLY_COMMENTS) is not None:
        updates["only_comments"] = _env_flag(ENV_ONLY_COMMENTS)

    raw_limit = os.getenv(ENV_MAX_CONCURRENT_READS)
    if raw_limit is not None:
        limit = _parse_positive_int(raw_limit, ENV_MAX_CONCURRENT_READS, strict)
        if limit is not None:
            updates["max_concurrent_reads"] = limit

    return replace(config, **updates) if updates else config


def load_reader_config(
    path: Optional[str] = None,
    strict: Optional[bool] = None,
    use_env: bool = True,
) -> ReaderConfig:
    """Load reader configuration.

    Args:
        path: Optional YAML or JSON config file.
        strict: Raise ``ConfigValidationError`` on invalid input instead of
            warning and falling back. Defaults to ``STRICT_CONFIG_VALIDATION``.
        use_env: Apply ``.env`` and ``ACE_READER_*`` environment overrides.

    Returns:
        The resolved ReaderConfig.
    """
    if use_env:
        load_dotenv()
    if strict is None:
        strict = resolve_strict_config_validation(default=False)

    config = ReaderConfig()
    if path:
        payload = _load_config_payload(path, strict)
        config = parse_reader_config(payload, base=config, strict=strict)
    if use_env:
        config = apply_env_overrides(config, strict=strict)

    logger.debug("Resolved reader config: %s", config)
    return config
