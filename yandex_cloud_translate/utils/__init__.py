"""Utility modules."""

from yandex_cloud_translate.utils.logger_utils import LoggerUtils

__all__: list[str] = ["LoggerUtils"]
