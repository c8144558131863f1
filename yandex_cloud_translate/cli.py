"""Command-line front end for the translation client.

Reads credentials and defaults from the INI configuration file, runs one operation and
prints its result to stdout. Errors are reported on stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from yandex_cloud_translate.config.loader import ConfigLoader, ConfigLoaderError
from yandex_cloud_translate.core.trans.client import TranslationClient
from yandex_cloud_translate.core.trans.exceptions import TranslateClientError
from yandex_cloud_translate.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Sequence

    from yandex_cloud_translate.models.config_models import Config

__all__: list[str] = ["main", "parse_arguments"]

CFG_FILE: Final[str] = "yandex_translate.ini"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments. 'command' holds the selected operation.
    """
    parser = _ArgumentParser(
        prog="yc-translate",
        description="Translate text and detect languages with Yandex Cloud Translate",
        epilog="Example: yc-translate translate --to en 'привет, мир'",
    )
    parser.add_argument("--config", dest="config", default=CFG_FILE, metavar="FILE", help="Configuration file")
    parser.add_argument("--folder-id", dest="folder_id", metavar="FOLDER_ID", help="Override the folder id")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    translate = subparsers.add_parser("translate", help="Translate one or more texts")
    translate.add_argument("texts", nargs="+", metavar="TEXT")
    translate.add_argument("--to", dest="target", metavar="LANG", help="Target language code")
    translate.add_argument("--from", dest="source", metavar="LANG", help="Source language code")
    translate.add_argument(
        "--speller",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Apply spelling correction (default: TRANSLATION.SPELLER)",
    )

    subparsers.add_parser("languages", help="List the supported languages")

    detect = subparsers.add_parser("detect", help="Detect the language of a text")
    detect.add_argument("text", metavar="TEXT")
    detect.add_argument("--hint", dest="hints", action="append", metavar="LANG", help="Language hint (repeatable)")

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply command-line overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    return ConfigLoader(
        config_filename=args.config,
        script_name=script_name,
        folder_id=args.folder_id,
        debug=args.debug,
    ).config


async def run(args: argparse.Namespace, config: Config) -> list[str]:
    """Execute the selected command and return the lines to print."""
    async with TranslationClient.from_config(config) as client:
        if args.command == "translate":
            return await client.translate(
                args.texts,
                args.target or config.TRANSLATION.TARGET_LANGUAGE,
                source_language=args.source or config.TRANSLATION.SOURCE_LANGUAGE or None,
                speller=config.TRANSLATION.SPELLER if args.speller is None else args.speller,
            )
        if args.command == "languages":
            languages: dict[str, str] = await client.get_supported_languages()
            return [f"{code}\t{name}" for code, name in sorted(languages.items())]

        hints: list[str] | None = args.hints or config.TRANSLATION.LANGUAGE_HINTS or None
        return [await client.detect_language(args.text, hints)]


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the 'yc-translate' command.

    Returns:
        int: Process exit status.
    """
    args: argparse.Namespace = parse_arguments(argv)

    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print(err, file=sys.stderr)
        return 1

    logger_utils = LoggerUtils(config.GENERAL.LOG_FILE)
    logger_utils.set_level("DEBUG" if config.GENERAL.DEBUG else "INFO")

    try:
        lines: list[str] = asyncio.run(run(args, config))
    except TranslateClientError as err:
        print(err, file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
