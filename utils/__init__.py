"""Shared utilities for the advocate directory tools."""

# String utilities
from utils.strings import safe_int, normalize_whitespace, contains_casefold

# HTTP utilities
from utils.http import SessionManager, fetch_json

# Output formatting
from utils.formatting import format_phone, format_specialties, truncate_text, TableFormatter

# Configuration
from utils.config import AppConfig, ConfigurationError

# Logging
from utils.logging import JsonFormatter, configure_logging

__all__ = [
    # Strings
    "safe_int",
    "normalize_whitespace",
    "contains_casefold",
    # HTTP
    "SessionManager",
    "fetch_json",
    # Formatting
    "format_phone",
    "format_specialties",
    "truncate_text",
    "TableFormatter",
    # Config
    "AppConfig",
    "ConfigurationError",
    # Logging
    "JsonFormatter",
    "configure_logging",
]
