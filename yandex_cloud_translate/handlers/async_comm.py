"""Asynchronous HTTP transport used by the translation client.

The `AsyncHttp` class wraps a single aiohttp session carrying a fixed set of default headers.
Responses are returned as `HttpResponse` objects whatever their status, so that callers can
report the status code and body of a failed request. A successful body that cannot be decoded
is returned with the reason recorded in `HttpResponse.error`. Only transport-level problems
such as timeouts and refused or reset connections are raised as exceptions.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Literal, Self

import aiohttp
from aiohttp.client import ClientSession

from yandex_cloud_translate.utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping


__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
    "HttpResponse",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod = Literal["GET", "POST"]

CONNECT_TIMEOUT: Final[float] = 1.0


@dataclass(frozen=True)
class HttpResponse:
    """Outcome of a single HTTP request.

    Attributes:
        status (int): HTTP status code.
        reason (str | None): HTTP reason phrase.
        body (str): Raw response body decoded as UTF-8.
        data (Any): Body parsed by the content type handler. None for empty or unsuccessful responses.
        error (str | None): Why a successful body could not be decoded, otherwise None.
    """

    status: int
    reason: str | None = None
    body: str = ""
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class AsyncHttp:
    """Asynchronous HTTP client sharing one aiohttp session between concurrent requests.

    The session is created on first use, inside the running event loop, and carries the
    default headers given at construction for every request.
    """

    def __init__(self, *, headers: Mapping[str, str] | None = None) -> None:
        """Initialize the AsyncHttp client.

        No session is opened here. The default handlers are:
            - "text/plain": Decodes bytes to a UTF-8 string.
            - "application/json": Parses bytes as JSON.

        Args:
            headers (Mapping[str, str] | None): Headers sent with every request.
        """
        logger.debug("%s initializing", self.__class__.__name__)
        self.__session: ClientSession | None = None
        self._headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))
        self.content_handlers: dict[str, Callable[[bytes], Any]] = {}

        self.add_handler("text/plain", lambda x: x.decode("utf-8"))
        self.add_handler("application/json", lambda x: json.loads(x.decode("utf-8")))

    async def __aenter__(self) -> Self:
        logger.debug("%s entering context", self.__class__.__name__)
        self.initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        logger.debug("%s exiting context", self.__class__.__name__)
        await self.close()

    @property
    def headers(self) -> Mapping[str, str]:
        """Read-only view of the default request headers."""
        return self._headers

    @property
    def closed(self) -> bool:
        return self.__session is None or self.__session.closed

    def initialize_session(self) -> None:
        """Create the aiohttp session if there is none or the previous one was closed."""
        if self.closed:
            self.__session = ClientSession(headers=dict(self._headers))
            logger.debug("%s session initialized", self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        """Get the current aiohttp session, creating it when necessary."""
        self.initialize_session()
        if self.__session is None:
            msg = "Session could not be initialized"
            raise RuntimeError(msg)
        return self.__session

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
            logger.debug("%s session closed", self.__class__.__name__)
        self.__session = None

    async def post(
        self,
        *,
        url: str,
        data: Any | None = None,
        headers: Mapping[str, str] | None = None,
        total_timeout: float | None = None,
    ) -> HttpResponse:
        """Send a JSON body with an HTTP POST request.

        Args:
            url (str): The URL to send the POST request to.
            data (Any | None): Object serialized as the JSON request body.
            headers (Mapping[str, str] | None): Headers for this request, overriding the defaults.
            total_timeout (float | None): Total timeout in seconds. None keeps the session default.

        Returns:
            HttpResponse: Status, raw body and, for successful responses, the decoded body.
        """
        logger.debug("'url': '%s', 'data': '%s', 'timeout': '%s'", url, data, total_timeout)
        if headers:
            return await self._request("POST", url=url, total_timeout=total_timeout, json=data, headers=dict(headers))
        return await self._request("POST", url=url, total_timeout=total_timeout, json=data)

    def decode_response(self, content_type: str, raw: bytes) -> Any:
        """Parse a response body according to its content type.

        Args:
            content_type (str): The media type from the 'Content-Type' header, without parameters.
            raw (bytes): The response body.

        Returns:
            Any: The parsed response data, or None for an empty body.

        Raises:
            AsyncCommInvalidContentTypeError: If no handler is registered for the content type.
        """
        if not raw:
            logger.debug("Received empty response")
            return None

        handler: Callable[[bytes], Any] | None = self.content_handlers.get(content_type)
        if handler:
            return handler(raw)

        msg: str = f"Unknown Content-Type '{content_type}'"
        raise AsyncCommInvalidContentTypeError(msg)

    def add_handler(self, content_type: str, handler: Callable[[bytes], Any]) -> None:
        """Register a parser for a content type, replacing any existing one."""
        if self.content_handlers.get(content_type):
            logger.warning("Handler for content type '%s' already exists, replacing it", content_type)
        self.content_handlers[content_type] = handler

    @staticmethod
    def _build_timeout(total_timeout: float | None) -> aiohttp.ClientTimeout | None:
        if total_timeout is None:
            return None
        if total_timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if total_timeout < CONNECT_TIMEOUT:
            # keep the connect timeout from exceeding the total timeout
            return aiohttp.ClientTimeout(total=total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

    async def _request(
        self,
        method: HTTPMethod,
        *,
        url: str,
        total_timeout: float | None,
        **kwargs: Any,
    ) -> HttpResponse:
        """Perform an asynchronous HTTP request.

        Args:
            method (HTTPMethod): The HTTP method to use.
            url (str): The URL to send the request to.
            total_timeout (float | None): Total timeout in seconds. None keeps the session default.
            **kwargs: Additional keyword arguments passed to the aiohttp request.

        Returns:
            HttpResponse: The received response. A successful body with an unknown content type
                or malformed content comes back with `error` set and `data` left as None.

        Raises:
            AsyncCommTimeoutError: If the server does not respond in time.
            AsyncCommError: If the connection fails or the response cannot be read.
        """
        timeout: aiohttp.ClientTimeout | None = self._build_timeout(total_timeout)
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            async with self.session.request(method=method, url=url, **kwargs) as resp:
                raw: bytes = await resp.read()
                content_type: str = resp.headers.get("Content-Type", "").split(";")[0].strip()
                logger.debug("[%s] url=%s status=%s 'Content-Type': '%s'", method, url, resp.status, content_type)

                response = HttpResponse(
                    status=resp.status,
                    reason=resp.reason,
                    body=raw.decode("utf-8", errors="replace"),
                )
                if not response.ok:
                    return response
                try:
                    decoded: Any = self.decode_response(content_type, raw)
                except (AsyncCommInvalidContentTypeError, ValueError) as err:
                    logger.debug("Undecodable response body: %s", err)
                    return HttpResponse(
                        status=response.status,
                        reason=response.reason,
                        body=response.body,
                        error=str(err) or err.__class__.__name__,
                    )
                return HttpResponse(
                    status=response.status,
                    reason=response.reason,
                    body=response.body,
                    data=decoded,
                )

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "Unable to connect to the server."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP client error: {err}"
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors."""


class AsyncCommTimeoutError(AsyncCommError):
    """A request did not complete within the timeout period."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """A successful response had a content type with no registered handler."""
