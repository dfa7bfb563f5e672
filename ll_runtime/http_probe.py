"""HTTP reachability checks used by the readiness prober."""

from __future__ import annotations

import http.client
import json
import logging
from typing import List
from urllib import error, request
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def _connection(url: str, timeout: float) -> tuple[http.client.HTTPConnection, str]:
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ValueError(f"Not an HTTP URL: {url}")
    connection_cls = (
        http.client.HTTPSConnection if parts.scheme == "https" else http.client.HTTPConnection
    )
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    return connection_cls(parts.hostname, parts.port, timeout=timeout), path


def http_probe(url: str, timeout: float = 1.0) -> bool:
    """Return True if something accepts a connection to ``url`` within ``timeout``.

    ``timeout`` bounds the connect. Once connected, any answer counts as
    reachable: an HTTP error status, a non-HTTP reply, or no reply at all
    within another ``timeout``.
    """
    try:
        connection, path = _connection(url, timeout)
    except (ValueError, http.client.InvalidURL) as exc:
        logger.debug("Probe of %s skipped: %s", url, exc)
        return False
    try:
        try:
            connection.connect()
        except OSError as exc:
            logger.debug("Probe of %s failed: %s", url, exc)
            return False
        try:
            connection.request("GET", path)
            connection.getresponse().close()
        except (http.client.HTTPException, OSError) as exc:
            logger.debug("%s accepted the connection but answered oddly: %r", url, exc)
        return True
    finally:
        connection.close()


def list_models(url: str, *, timeout: float = 5.0) -> List[str]:
    """Return model identifiers from an Ollama ``/api/tags`` or OpenAI ``/models`` listing.

    Returns an empty list when the listing cannot be fetched or parsed.
    """
    try:
        with request.urlopen(url, timeout=timeout) as response:
            payload = json.loads(response.read().decode("utf-8"))
    except (error.URLError, OSError, ValueError) as exc:
        logger.debug("Model listing from %s failed: %s", url, exc)
        return []
    if not isinstance(payload, dict):
        return []
    if isinstance(payload.get("models"), list):
        return [str(m.get("name")) for m in payload["models"] if isinstance(m, dict) and m.get("name")]
    if isinstance(payload.get("data"), list):
        return [str(m.get("id")) for m in payload["data"] if isinstance(m, dict) and m.get("id")]
    return []
