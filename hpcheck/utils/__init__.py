"""Utility modules."""

from .logging_config import (
    setup_logging,
    ensure_logging,
    HpcheckFormatter,
    FileFormatter,
)
from .validation import (
    ValidationError,
    load_request,
    load_scenario_request,
    normalize_request,
    parse_date,
    parse_enum,
    parse_flag,
    parse_number,
    parse_tristate,
    round_half_up,
)

__all__ = [
    # Logging
    "setup_logging",
    "ensure_logging",
    "HpcheckFormatter",
    "FileFormatter",
    # Validation
    "ValidationError",
    "load_request",
    "load_scenario_request",
    "normalize_request",
    "parse_date",
    "parse_enum",
    "parse_flag",
    "parse_number",
    "parse_tristate",
    "round_half_up",
]
