"""Data models for the Translate v2 REST API payloads.

Requests are serialized with camelCase keys; optional request fields left as None are
omitted from the body. The service drops empty repeated fields and empty strings from its
JSON output, so every response field has a default.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin, LetterCase, config, dataclass_json

__all__: list[str] = [
    "ClientConfig",
    "DetectRequest",
    "DetectResponse",
    "Language",
    "LanguagesRequest",
    "LanguagesResponse",
    "TranslateRequest",
    "TranslateResponse",
    "TranslatedText",
]


def _omit_if_none(value: object) -> bool:
    return value is None


@dataclass(frozen=True)
class ClientConfig:
    """Credentials fixed for the lifetime of a client.

    Attributes:
        auth_token (str): API key presented with every request. Hidden from repr.
        folder_id (str): Folder the requests are billed to.
    """

    auth_token: str = field(repr=False)
    folder_id: str

    @property
    def authorization(self) -> str:
        """Value of the 'Authorization' header."""
        return f"Api-Key {self.auth_token}"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslateRequest(DataClassJsonMixin):
    """Body of a translate request."""

    folder_id: str
    texts: list[str]
    target_language_code: str
    source_language_code: str | None = field(default=None, metadata=config(exclude=_omit_if_none))
    speller: bool | None = field(default=None, metadata=config(exclude=_omit_if_none))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslatedText(DataClassJsonMixin):
    """A single translation, aligned with the input text at the same index."""

    text: str = ""
    detected_language_code: str | None = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslateResponse(DataClassJsonMixin):
    translations: list[TranslatedText] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class LanguagesRequest(DataClassJsonMixin):
    folder_id: str


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class Language(DataClassJsonMixin):
    """Supported language entry. Some entries come without a display name."""

    code: str
    name: str = ""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class LanguagesResponse(DataClassJsonMixin):
    languages: list[Language] = field(default_factory=list)

    def to_catalog(self) -> dict[str, str]:
        """Map each language code to its display name."""
        return {language.code: language.name for language in self.languages}


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class DetectRequest(DataClassJsonMixin):
    """Body of a language detection request."""

    folder_id: str
    text: str
    language_code_hints: list[str]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class DetectResponse(DataClassJsonMixin):
    language_code: str = ""
