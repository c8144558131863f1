"""Unit tests for the Yandex Cloud Translate client.

Tests use pytest with asyncio support and replace the aiohttp session or the HTTP
transport with dummies via monkeypatch, so no request leaves the process.
"""
