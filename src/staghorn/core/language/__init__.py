"""Language detection and per-layer language config loading."""

from .detect import (
    SUPPORTED_LANGUAGES,
    Language,
    LanguageConfig,
    detect,
    filter_disabled,
    get_display_name,
    get_language,
    resolve,
)
from .loader import LanguageFile, has_user_content, list_available_languages, load_language_files

__all__ = [
    "SUPPORTED_LANGUAGES",
    "Language",
    "LanguageConfig",
    "LanguageFile",
    "detect",
    "filter_disabled",
    "get_display_name",
    "get_language",
    "has_user_content",
    "list_available_languages",
    "load_language_files",
    "resolve",
]
