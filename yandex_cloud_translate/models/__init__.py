"""Data models.

This package contains dataclass definitions for the configuration file and for the
request and response bodies of the translation API.
"""

from __future__ import annotations

from yandex_cloud_translate.models.config_models import Config
from yandex_cloud_translate.models.translation_models import (
    ClientConfig,
    DetectRequest,
    DetectResponse,
    Language,
    LanguagesRequest,
    LanguagesResponse,
    TranslatedText,
    TranslateRequest,
    TranslateResponse,
)

__all__: list[str] = [
    "ClientConfig",
    "Config",
    "DetectRequest",
    "DetectResponse",
    "Language",
    "LanguagesRequest",
    "LanguagesResponse",
    "TranslateRequest",
    "TranslateResponse",
    "TranslatedText",
]
