"""Data layer utilities for loading JSON definitions and dialogue scripts."""

from .errors import DataLoadError, DataReferenceError, DataValidationError
from .paths import get_definitions_path, get_dialogues_path, get_repo_root

__all__ = [
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "get_definitions_path",
    "get_dialogues_path",
    "get_repo_root",
]
