"""Asynchronous client for the Yandex Cloud Translate v2 API.

Provides text translation, supported-language listing and language detection.
"""

from yandex_cloud_translate.core.trans.client import TranslationClient
from yandex_cloud_translate.core.trans.exceptions import TranslateClientError, TranslationError, ValidationError

__version__: str = "1.0.0"

__all__: list[str] = [
    "TranslateClientError",
    "TranslationClient",
    "TranslationError",
    "ValidationError",
    "__version__",
]
