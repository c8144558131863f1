"""Translation client and its exceptions."""

from yandex_cloud_translate.core.trans.client import TranslationClient
from yandex_cloud_translate.core.trans.exceptions import TranslateClientError, TranslationError, ValidationError

__all__: list[str] = [
    "TranslateClientError",
    "TranslationClient",
    "TranslationError",
    "ValidationError",
]
