"""Configuration data models for the translation client and its command line.

Each dataclass mirrors one section of the INI file. Field names match the INI keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["Config", "General", "Translation", "Yandex"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""


@dataclass
class Yandex:
    FOLDER_ID: str = ""
    API_KEY: str = ""
    TIMEOUT: float = 0.0  # 0 keeps the transport default


@dataclass
class Translation:
    TARGET_LANGUAGE: str = "en"
    SOURCE_LANGUAGE: str = ""
    SPELLER: bool = False
    LANGUAGE_HINTS: list[str] = field(default_factory=list)


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    YANDEX: Yandex = field(default_factory=Yandex)
    TRANSLATION: Translation = field(default_factory=Translation)
