"""Heuristic structural metadata extraction."""

from .base import ExtractedMetadata, LanguageExtractor, dedupe
from .comments import comment_styles_for, extract_comments
from .engine import MetadataExtractor, build_extractor_table, extract
from .fallback import PlainTextExtractor
from .file_type import (
    CONFIG_FILE_TYPE,
    DOCUMENTATION_FILE_TYPE,
    detect_file_type,
    is_react_type,
    is_test_type,
)
from .go import GoExtractor
from .java import JavaExtractor
from .languages import FALLBACK_LANGUAGE, JS_TS_LANGUAGES, LANGUAGE_BY_EXTENSION, language_for_path
from .python import PythonExtractor
from .rust import RustExtractor
from .ts_js import DEFAULT_EXPORT_PREFIX, TypeScriptJavaScriptExtractor

__all__ = [
    "CONFIG_FILE_TYPE",
    "DEFAULT_EXPORT_PREFIX",
    "DOCUMENTATION_FILE_TYPE",
    "ExtractedMetadata",
    "FALLBACK_LANGUAGE",
    "GoExtractor",
    "JS_TS_LANGUAGES",
    "JavaExtractor",
    "LANGUAGE_BY_EXTENSION",
    "LanguageExtractor",
    "MetadataExtractor",
    "PlainTextExtractor",
    "PythonExtractor",
    "RustExtractor",
    "TypeScriptJavaScriptExtractor",
    "build_extractor_table",
    "comment_styles_for",
    "dedupe",
    "detect_file_type",
    "extract",
    "extract_comments",
    "is_react_type",
    "is_test_type",
    "language_for_path",
]
