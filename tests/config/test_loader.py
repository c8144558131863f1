from __future__ import annotations

import logging
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from yandex_cloud_translate.config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigTypeError,
    ConfigValueError,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "yandex_translate.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "missing.ini"
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_config_loader_coerces_values(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = yes
        LOG_FILE = translate.log

        [YANDEX]
        FOLDER_ID = "b1gfolder"
        API_KEY = 'key-123'
        TIMEOUT = 7.5

        [TRANSLATION]
        TARGET_LANGUAGE = de
        SOURCE_LANGUAGE = ru
        SPELLER = true
        LANGUAGE_HINTS = ["ru", "en"]
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.DEBUG is True
    assert config.GENERAL.LOG_FILE == "translate.log"
    assert config.YANDEX.FOLDER_ID == "b1gfolder"
    assert config.YANDEX.API_KEY == "key-123"
    assert config.YANDEX.TIMEOUT == 7.5
    assert config.TRANSLATION.TARGET_LANGUAGE == "de"
    assert config.TRANSLATION.SOURCE_LANGUAGE == "ru"
    assert config.TRANSLATION.SPELLER is True
    assert config.TRANSLATION.LANGUAGE_HINTS == ["ru", "en"]


def test_config_loader_keeps_defaults_and_applies_overrides(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [YANDEX]
        FOLDER_ID = from_file
        """,
    )

    config = ConfigLoader(
        config_filename=str(ini_path),
        script_name="test",
        folder_id="from_cli",
        debug=True,
    ).config

    assert config.YANDEX.FOLDER_ID == "from_cli"
    assert config.GENERAL.DEBUG is True
    assert config.YANDEX.API_KEY == ""
    assert config.YANDEX.TIMEOUT == 0.0
    assert config.TRANSLATION.TARGET_LANGUAGE == "en"
    assert config.TRANSLATION.LANGUAGE_HINTS == []


def test_config_loader_treats_empty_hints_as_default(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        LANGUAGE_HINTS =
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.LANGUAGE_HINTS == []


def test_config_loader_warns_without_folder_id(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="YandexCloudTranslate")
    ini_path: Path = _write_ini(tmp_path, "[GENERAL]\nDEBUG = False\n")

    ConfigLoader(config_filename=str(ini_path), script_name="test")

    assert any("FOLDER_ID" in rec.message for rec in caplog.records)


@pytest.mark.parametrize(
    ("content", "error"),
    [
        ("[GENERAL]\nDEBUG = maybe\n", ConfigValueError),
        ("[YANDEX]\nTIMEOUT = soon\n", ConfigValueError),
        ("[YANDEX]\nTIMEOUT = -1\n", ConfigValueError),
        ("[TRANSLATION]\nTARGET_LANGUAGE = English\n", ConfigValueError),
        ("[TRANSLATION]\nTARGET_LANGUAGE =\n", ConfigValueError),
        ("[TRANSLATION]\nLANGUAGE_HINTS = \"ru\"\n", ConfigTypeError),
        ("[TRANSLATION]\nLANGUAGE_HINTS = [\"ru\", \"Russian\"]\n", ConfigValueError),
        ("[TRANSLATION]\nLANGUAGE_HINTS = [\"ru\",\n", ConfigFormatError),
        ("not an ini file\n", ConfigFormatError),
    ],
)
def test_config_loader_rejects_invalid_values(tmp_path: Path, content: str, error: type[Exception]) -> None:
    ini_path: Path = _write_ini(tmp_path, content)

    with pytest.raises(error):
        ConfigLoader(config_filename=str(ini_path), script_name="test")
