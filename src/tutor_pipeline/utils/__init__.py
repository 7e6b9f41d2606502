"""
Shared utilities for the build pipeline.

This package contains reusable components used across all pipeline stages:
- file_io.py: tolerant JSON reads, stable JSON writes and directory handling
- logging_config.py: JSON or loguru-backed logging for pipeline observability
- text_utils.py: first-non-empty selection and topic title derivation
"""

__all__ = [
    "file_io",
    "logging_config",
    "text_utils",
]
