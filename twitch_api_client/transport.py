"""Shared HTTP transport.

A :class:`Transport` wraps one :class:`requests.Session` together with the
API base URLs and a per-request timeout.  A single instance is meant to be
created once and handed to every request, from any number of threads; it
keeps no per-request state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import requests

from .config import DEFAULT_API_BASE_URL, DEFAULT_AUTH_URL, ClientSettings
from .exceptions import TransportError

logger = logging.getLogger(__name__)

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


class Transport:
    """Sends requests to Twitch over a shared session.

    Parameters
    ----------
    api_base_url : str, optional
        Base URL that relative endpoint paths are joined onto.
    auth_url : str, optional
        URL of the OAuth token endpoint.
    timeout : float, optional
        Default timeout in seconds for every request.
    user_agent : str, optional
        Value of the ``User-Agent`` header.
    session : requests.Session, optional
        Session to send requests with.  A new one is created when omitted,
        and is closed by :meth:`close`.
    """

    def __init__(
        self,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        auth_url: str = DEFAULT_AUTH_URL,
        timeout: Optional[float] = 20.0,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive, got %r" % timeout)
        self.api_base_url = api_base_url
        self.auth_url = auth_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None, **kwargs: Any) -> "Transport":
        settings = settings or ClientSettings()
        return cls(
            api_base_url=settings.api_base_url,
            auth_url=settings.auth_url,
            timeout=settings.timeout_seconds,
            user_agent=settings.user_agent,
            **kwargs,
        )

    def prepare_url(self, path: str) -> str:
        """Build the full request URL from a relative or absolute path.

        Absolute URLs (starting with ``http://`` or ``https://``) are
        returned unchanged, anything else is joined onto ``api_base_url``.
        """
        if path.startswith("http://") or path.startswith("https://"):
            return path
        clean_path = path.lstrip("/")
        return f"{self.api_base_url.rstrip('/')}/{clean_path}"

    def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        data: Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send one request and return the raw response.

        Any status is returned as-is; only failures to deliver the request
        are raised.

        Raises
        ------
        TransportError
            If the request could not be completed (DNS, connection, TLS
            or timeout failure).
        """
        url = self.prepare_url(path)
        req_headers: Dict[str, str] = {"Accept": "application/json"}
        if self.user_agent:
            req_headers["User-Agent"] = self.user_agent
        if headers:
            req_headers.update(headers)

        logger.debug("%s %s", method.upper(), url)
        try:
            response = self.session.request(
                method=method.upper(),
                url=url,
                params=params,
                data=data,
                headers=req_headers,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(f"Failed to connect to {url}: {exc}") from exc

        logger.debug("%s %s -> %s", method.upper(), url, response.status_code)
        return response

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Transport(api_base_url={self.api_base_url!r}, timeout={self.timeout!r})"
