"""GraphQL client for the Wiki.js API.

This module owns the single HTTP session used to talk to Wiki.js. It posts
operation text to the /graphql endpoint, unwraps the response envelope and
translates failures into the typed exception hierarchy. Asset uploads use a
separate multipart request to the /u endpoint, streamed from disk.
"""

import logging
import re
import time
from pathlib import Path
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException
from requests_toolbelt import MultipartEncoder

from .auth import ConfigProvider, WikiConfig
from .errors import GraphQLError, TransportError
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Thin wrapper around a requests session bound to one Wiki.js instance.

    The session and configuration are created lazily on first use and reused
    for every subsequent call. Call ``invalidate()`` to drop both (for
    example in tests, or after the configuration file changed).

    The client is not guarded against concurrent first use; callers that
    fan out across threads should make one call first.

    Example:
        >>> client = GraphQLClient(ConfigProvider())
        >>> data = client.execute("query { system { info { currentVersion } } }")
    """

    GRAPHQL_ENDPOINT = '/graphql'
    UPLOAD_ENDPOINT = '/u'
    TIMEOUT = 30

    def __init__(
        self,
        config_provider: Optional[ConfigProvider] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """Initialize the client without touching configuration or network.

        Args:
            config_provider: Source of url and token (default: ConfigProvider())
            rate_limiter: Optional pre-call hook that may delay requests
        """
        self._config_provider = config_provider or ConfigProvider()
        self._rate_limiter = rate_limiter
        self._session: Optional[requests.Session] = None

    @property
    def config(self) -> WikiConfig:
        """Resolved configuration (loaded on first access)."""
        return self._config_provider.get_config()

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session with auth and JSON headers."""
        if self._session is None:
            config = self.config
            session = requests.Session()
            session.headers.update({
                'Authorization': f'Bearer {config.api_token}',
                'Content-Type': 'application/json',
            })
            self._session = session
        return self._session

    def invalidate(self) -> None:
        """Close the session and drop cached configuration."""
        if self._session is not None:
            self._session.close()
            self._session = None
        self._config_provider.invalidate()

    def execute(self, query: str) -> Dict[str, Any]:
        """Send an operation to the GraphQL endpoint and return its data.

        Args:
            query: Complete GraphQL query or mutation text

        Returns:
            The ``data`` member of the response envelope ({} when absent)

        Raises:
            ConfigError: If configuration is missing or invalid
            GraphQLError: If the envelope carries a non-empty ``errors`` list,
                regardless of the HTTP status
            TransportError: On network failure, timeout, an HTTP error status
                without a GraphQL envelope, or an undecodable body
        """
        session = self._get_session()
        endpoint = f"{self.config.url}{self.GRAPHQL_ENDPOINT}"
        operation = _operation_name(query)

        if self._rate_limiter is not None:
            self._rate_limiter.wait()

        started = time.monotonic()
        try:
            response = session.post(
                endpoint,
                json={'query': query},
                timeout=self.TIMEOUT,
            )
        except RequestException as e:
            safe_error = _sanitize_credentials(str(e))
            logger.error(f"GraphQL request failed: {operation} - {safe_error}")
            raise TransportError(
                f"Request to {endpoint} failed: {safe_error}",
                endpoint=endpoint,
            ) from e

        logger.debug(
            f"GraphQL {operation} -> HTTP {response.status_code} "
            f"in {time.monotonic() - started:.2f}s"
        )

        envelope = self._decode(response, endpoint)

        errors = envelope.get('errors') if isinstance(envelope, dict) else None
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            raise GraphQLError(errors)

        if not response.ok:
            raise TransportError(
                f"HTTP {response.status_code} from {endpoint}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        if not isinstance(envelope, dict):
            raise TransportError(
                f"Unexpected response body from {endpoint}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        return envelope.get('data') or {}

    def upload(self, file_path: str, filename: Optional[str] = None) -> Any:
        """Upload a file through the multipart upload endpoint.

        The multipart body is streamed from the open file, so large assets
        are never held in memory.

        This path bypasses the GraphQL envelope: there is no ``errors`` list
        to inspect, only transport failures are reported.

        Args:
            file_path: Local file to send
            filename: Name to store the file under (default: file's base name)

        Returns:
            The decoded JSON body, or the raw text when it is not JSON

        Raises:
            FileNotFoundError: If file_path does not exist
            TransportError: On network failure or an HTTP error status
        """
        path = Path(file_path)
        path.stat()
        name = filename or path.name

        config = self.config
        endpoint = f"{config.url}{self.UPLOAD_ENDPOINT}"

        if self._rate_limiter is not None:
            self._rate_limiter.wait()

        logger.debug(f"Uploading {path} as {name}")
        try:
            with open(path, 'rb') as fh:
                body = MultipartEncoder(
                    fields={'mediaUpload': (name, fh, 'application/octet-stream')}
                )
                response = requests.post(
                    endpoint,
                    data=body,
                    headers={
                        'Authorization': f'Bearer {config.api_token}',
                        'Content-Type': body.content_type,
                    },
                    timeout=self.TIMEOUT,
                )
            response.raise_for_status()
        except RequestException as e:
            safe_error = _sanitize_credentials(str(e))
            logger.error(f"Upload of {name} failed: {safe_error}")
            status = getattr(getattr(e, 'response', None), 'status_code', None)
            raise TransportError(
                f"Upload to {endpoint} failed: {safe_error}",
                endpoint=endpoint,
                status_code=status,
            ) from e

        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _decode(response: requests.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON response from {endpoint} (HTTP {response.status_code})",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from e


def _operation_name(query: str) -> str:
    """Describe an operation for logs, e.g. 'mutation pages.create'."""
    match = re.search(r'\b(query|mutation)\s*\{\s*(\w+)\s*\{\s*(\w+)', query)
    if not match:
        return 'operation'
    return f"{match.group(1)} {match.group(2)}.{match.group(3)}"


def _sanitize_credentials(text: str) -> str:
    """Mask tokens in error messages before they are logged or raised.

    Example:
        >>> _sanitize_credentials("Authorization: Bearer abc.def")
        'Authorization: ***REDACTED***'
    """
    if not text:
        return text

    sanitized = re.sub(
        r'Authorization:\s*[^\n\r]+',
        'Authorization: ***REDACTED***',
        text,
        flags=re.IGNORECASE
    )
    sanitized = re.sub(
        r'Bearer\s+[^\s]+',
        'Bearer ***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )
    sanitized = re.sub(
        r'(api_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
        r'\1=***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )
    return sanitized
