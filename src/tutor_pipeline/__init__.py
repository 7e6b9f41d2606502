"""
Tutor Asset Build Pipeline

This package compiles bilingual (German/Farsi) algorithm tutoring content from an
external authoring tree into deterministic JSON assets served by a read-only API.

**Version**: 0.1.0
**Python**: >=3.11
**Key Dependencies**: pydantic, python-dotenv, loguru, tqdm
"""

__version__ = "0.1.0"
__author__ = "Tutor Data"

# Pipeline metadata
SUPPORTED_LANGUAGES = ["de", "fa"]
MODES = ["pseudocode", "explain", "exam"]
ASSET_VERSION = "1.0"
INDEX_SOURCE_TAG = "generated-from-assets"

__all__ = [
    "__version__",
    "__author__",
    "SUPPORTED_LANGUAGES",
    "MODES",
    "ASSET_VERSION",
    "INDEX_SOURCE_TAG",
]
