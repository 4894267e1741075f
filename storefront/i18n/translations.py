"""Internationalization System"""

import json
from pathlib import Path
from typing import Any

SUPPORTED_LANGUAGES = {
    "ar": "العربية",
    "en": "English",
}

DEFAULT_LANGUAGE = "ar"

# Cache for loaded translations
_translations: dict[str, dict[str, Any]] = {}


def _get_locales_path() -> Path:
    """Get path to the bundled locales directory"""
    return Path(__file__).parent / "locales"


def _load_translations(lang: str) -> dict[str, Any]:
    """Load translations for a language"""
    if lang in _translations:
        return _translations[lang]

    file_path = _get_locales_path() / f"{lang}.json"

    if not file_path.exists():
        if lang != DEFAULT_LANGUAGE:
            return _load_translations(DEFAULT_LANGUAGE)
        return {}

    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    _translations[lang] = data
    return data


def _lookup(translations: dict[str, Any], key: str) -> Any:
    """Resolve a dotted key ("toast.cart_added") in a translations dict."""
    current: Any = translations
    for part in key.split("."):
        try:
            current = current[part]
        except (KeyError, TypeError):
            return None
    return current


def detect_language(language_code: str | None) -> str:
    """
    Normalize a language code ("en-US" -> "en").

    Returns:
        Supported language code, DEFAULT_LANGUAGE otherwise
    """
    if not language_code:
        return DEFAULT_LANGUAGE
    lang = language_code.split("-")[0].lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_text(key: str, lang: str = DEFAULT_LANGUAGE, default: str | None = None, **kwargs) -> str:
    """
    Get translated text by key.

    Args:
        key: Translation key, dotted for nested keys (e.g., "empty.cart")
        lang: Language code (e.g., "ar", "en")
        default: Default value if key not found (instead of returning key)
        **kwargs: Variables to format into the string

    Returns:
        Translated string or key/default if not found
    """
    lang = detect_language(lang)

    text = _lookup(_load_translations(lang), key)
    if text is None and lang != DEFAULT_LANGUAGE:
        text = _lookup(_load_translations(DEFAULT_LANGUAGE), key)

    if not isinstance(text, str):
        return default if default is not None else key

    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, ValueError, AttributeError):
            return text

    return text


def reload_translations() -> None:
    """Clear translation cache and reload"""
    global _translations
    _translations = {}
