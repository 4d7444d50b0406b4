"""Core shared configuration, logging and output helpers."""

from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.reader_config import (
    ConfigValidationError,
    apply_env_overrides,
    load_reader_config,
    parse_reader_config,
    resolve_strict_config_validation,
)
from core.run_artifacts import build_run_report, write_json_output, write_run_report

__all__ = [
    "configure_structured_logging",
    "get_phase",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "apply_env_overrides",
    "load_reader_config",
    "parse_reader_config",
    "resolve_strict_config_validation",
    "build_run_report",
    "write_json_output",
    "write_run_report",
]
