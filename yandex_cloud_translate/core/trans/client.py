"""Yandex Cloud Translate (v2) client.

Each operation is a coroutine that sends one JSON POST request and projects the
interesting field out of the JSON response. A single client may be shared by concurrent
tasks: the only shared resource is the aiohttp session held by its `AsyncHttp` transport.

Docs:
    https://yandex.cloud/en/docs/translate/api-ref/Translation/
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final, Self, TypeVar

from dataclasses_json import DataClassJsonMixin

from yandex_cloud_translate.core.trans.exceptions import TranslationError, ValidationError
from yandex_cloud_translate.handlers.async_comm import AsyncCommError, AsyncHttp
from yandex_cloud_translate.models.translation_models import (
    ClientConfig,
    DetectRequest,
    DetectResponse,
    LanguagesRequest,
    LanguagesResponse,
    TranslateRequest,
    TranslateResponse,
)
from yandex_cloud_translate.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from yandex_cloud_translate.handlers.async_comm import HttpResponse
    from yandex_cloud_translate.models.config_models import Config

__all__: list[str] = [
    "API_KEY_ENV",
    "DEFAULT_LANGUAGE_HINTS",
    "DETECT_ENDPOINT",
    "LANGUAGES_ENDPOINT",
    "MAX_DETECT_LENGTH",
    "TRANSLATE_ENDPOINT",
    "TranslationClient",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

TRANSLATE_ENDPOINT: Final[str] = "https://translate.api.cloud.yandex.net/translate/v2/translate"
LANGUAGES_ENDPOINT: Final[str] = "https://translate.api.cloud.yandex.net/translate/v2/languages"
DETECT_ENDPOINT: Final[str] = "https://translate.api.cloud.yandex.net/translate/v2/detect"

MAX_DETECT_LENGTH: Final[int] = 1000
DEFAULT_LANGUAGE_HINTS: Final[tuple[str, ...]] = ("ru",)
API_KEY_ENV: Final[str] = "YANDEX_CLOUD_API_OAUTH"

T = TypeVar("T", bound=DataClassJsonMixin)


class TranslationClient:
    """Client for the translate, languages and detect endpoints.

    Creating a client performs no I/O. The HTTP session is opened on the first request and
    released by `close()` or by leaving an ``async with`` block.

    Examples:
        >>> async with TranslationClient(api_key, folder_id) as client:
        ...     await client.translate(["привет"], "en")
        ['hello']
    """

    def __init__(
        self,
        auth_token: str,
        folder_id: str,
        *,
        http: AsyncHttp | None = None,
        timeout: float | None = None,
    ) -> None:
        """Fix the credentials used for every request made by this client.

        Args:
            auth_token (str): API key sent as 'Authorization: Api-Key <token>'.
            folder_id (str): Folder the requests are billed to.
            http (AsyncHttp | None): Shared transport to use instead of a private one.
                The client never closes a transport it did not create.
            timeout (float | None): Total timeout per request in seconds. None keeps the transport default.
        """
        self._config: ClientConfig = ClientConfig(auth_token=auth_token, folder_id=folder_id)
        self._timeout: float | None = timeout
        self._owns_http: bool = http is None
        self._http: AsyncHttp = (
            http
            if http is not None
            else AsyncHttp(headers={"Authorization": self._config.authorization, "Content-Type": "application/json"})
        )
        logger.debug("%s created for folder '%s'", self.__class__.__name__, folder_id)

    @classmethod
    def from_config(cls, config: Config, *, http: AsyncHttp | None = None) -> Self:
        """Build a client from the loaded configuration.

        The API key is read from 'YANDEX.API_KEY' and, when that is empty, from the
        YANDEX_CLOUD_API_OAUTH environment variable.

        Raises:
            ValidationError: If the API key or the folder id is missing.
        """
        auth_token: str = config.YANDEX.API_KEY or os.getenv(API_KEY_ENV, "")
        if not auth_token:
            msg: str = f"API key is not set. Set 'YANDEX.API_KEY' or the '{API_KEY_ENV}' environment variable."
            raise ValidationError(msg)
        if not config.YANDEX.FOLDER_ID:
            msg = "Folder id is not set. Set 'YANDEX.FOLDER_ID'."
            raise ValidationError(msg)

        return cls(auth_token, config.YANDEX.FOLDER_ID, http=http, timeout=config.YANDEX.TIMEOUT or None)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    @property
    def folder_id(self) -> str:
        return self._config.folder_id

    @property
    def http(self) -> AsyncHttp:
        return self._http

    async def close(self) -> None:
        """Release the HTTP session of a private transport. The client reopens it if used again.

        An injected transport is left open for its owner to close.
        """
        if self._owns_http:
            await self._http.close()
        logger.debug("'%s' process termination", self.__class__.__name__)

    async def translate(
        self,
        texts: Sequence[str],
        target_language: str,
        *,
        source_language: str | None = None,
        speller: bool = False,
    ) -> list[str]:
        """Translate texts into the target language.

        Args:
            texts (Sequence[str]): Texts to translate. Each item may be a word, phrase or sentence.
            target_language (str): Target language code (e.g. "en").
            source_language (str | None): Source language code. If None, the service detects it.
                Useful for words spelled the same in several languages.
            speller (bool): Apply spelling correction before translating.

        Returns:
            list[str]: Translations in the order of the input texts.

        Raises:
            TranslationError: If the request fails or the service rejects it.
        """
        _texts: list[str] = list(texts)
        if not _texts:
            logger.debug("Nothing to translate")
            return []

        request = TranslateRequest(
            folder_id=self.folder_id,
            texts=_texts,
            target_language_code=target_language,
            source_language_code=source_language or None,
            speller=True if speller else None,
        )
        response: TranslateResponse = await self._call(
            TRANSLATE_ENDPOINT, request, TranslateResponse, action="translate the text"
        )

        translations: list[str] = [translation.text for translation in response.translations]
        if len(translations) != len(_texts):
            logger.warning("Received %d translations for %d texts", len(translations), len(_texts))
        logger.info("translation completed (%s > %s)", source_language or "auto", target_language)
        return translations

    async def get_supported_languages(self) -> dict[str, str]:
        """Retrieve all languages supported by the service.

        Returns:
            dict[str, str]: Language code mapped to its display name.

        Raises:
            TranslationError: If the request fails or the service rejects it.
        """
        response: LanguagesResponse = await self._call(
            LANGUAGES_ENDPOINT,
            LanguagesRequest(folder_id=self.folder_id),
            LanguagesResponse,
            action="retrieve the supported languages",
        )
        catalog: dict[str, str] = response.to_catalog()
        logger.info("%d supported languages received", len(catalog))
        return catalog

    async def detect_language(self, text: str, language_hints: Sequence[str] | None = None) -> str:
        """Detect the language of a text.

        Args:
            text (str): Text to analyze, at most 1000 characters.
            language_hints (Sequence[str] | None): Languages to prefer when the text is ambiguous.
                Defaults to ["ru"].

        Returns:
            str: Detected language code (e.g. "ru").

        Raises:
            ValidationError: If the text is longer than 1000 characters. No request is sent.
            TranslationError: If the request fails or the service rejects it.
        """
        if len(text) > MAX_DETECT_LENGTH:
            msg: str = f"Max {MAX_DETECT_LENGTH} characters to detect, got {len(text)}"
            raise ValidationError(msg)

        hints: list[str] = list(language_hints) if language_hints is not None else list(DEFAULT_LANGUAGE_HINTS)
        response: DetectResponse = await self._call(
            DETECT_ENDPOINT,
            DetectRequest(folder_id=self.folder_id, text=text, language_code_hints=hints),
            DetectResponse,
            action="detect the language of the text",
        )
        logger.info("Detected language: '%s'", response.language_code)
        return response.language_code

    async def _call(self, url: str, request: DataClassJsonMixin, model: type[T], *, action: str) -> T:
        """POST the request body and decode a successful response into the model.

        The authorization header is sent with every request, so a shared transport
        never decides which credential is used.

        Raises:
            TranslationError: If no response is received, the status is not 2xx,
                or the body cannot be decoded or does not match the model.
        """
        try:
            response: HttpResponse = await self._http.post(
                url=url,
                data=request.to_dict(),
                headers={"Authorization": self._config.authorization},
                total_timeout=self._timeout,
            )
        except AsyncCommError as err:
            logger.error("Failed to %s: %s", action, err)
            msg: str = f"Failed to {action}: {err}"
            raise TranslationError(msg) from err

        if not response.ok:
            logger.error("Failed to %s: status=%s reason=%s", action, response.status, response.reason)
            msg = f"Failed to {action}"
            raise TranslationError(msg, status=response.status, body=response.body)

        if response.error is not None:
            logger.error("Failed to %s: undecodable response: %s", action, response.error)
            msg = f"Failed to {action}: the response could not be decoded ({response.error})"
            raise TranslationError(msg, status=response.status, body=response.body)

        logger.debug("'response': '%s'", response.data)
        if not isinstance(response.data, dict):
            msg = f"Failed to {action}: unexpected response format"
            raise TranslationError(msg, status=response.status, body=response.body)

        try:
            return model.from_dict(response.data)
        except (KeyError, TypeError, ValueError) as err:
            msg = f"Failed to {action}: unexpected response format"
            raise TranslationError(msg, status=response.status, body=response.body) from err
