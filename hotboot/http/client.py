# hotboot/http/client.py
from __future__ import annotations
import logging
import re
from pathlib import Path
from urllib.parse import urlparse

import httpx

from hotboot.core.errors import FetchError

logger = logging.getLogger(__name__)

__all__ = ["fetchBytes", "fileUrlToPath", "FILE_SCHEME_PREFIX"]

FILE_SCHEME_PREFIX = "file://"
_WINDOWS_DRIVE_RE = re.compile(r"^/[A-Za-z]:")



def fileUrlToPath(address: str) -> Path:
    """
    Turns a file:// address into a filesystem path.

    Accepts both "file:///abs/path" and "file://C:/dir/x" (and "file:///C:/dir/x").
    Addresses are taken verbatim, no percent-decoding.
    """
    if not address.lower().startswith(FILE_SCHEME_PREFIX):
        raise ValueError(f"Not a file address: '{address}'")
    raw = address[len(FILE_SCHEME_PREFIX):]
    if raw.lower().startswith("localhost/"):
        raw = raw[len("localhost"):]
    if _WINDOWS_DRIVE_RE.match(raw):
        raw = raw[1:]
    return Path(raw)



async def _readFile(address: str) -> bytes:
    path = fileUrlToPath(address)
    try:
        return path.read_bytes()
    except OSError as err:
        raise FetchError(address, err.strerror or str(err)) from err



async def _fetchHttp(address: str, transport: httpx.AsyncBaseTransport | None) -> bytes:
    # No timeout: a server that never answers stalls the caller
    timeout = httpx.Timeout(None)
    clientKwargs: dict = {"timeout": timeout}
    if transport is not None:
        clientKwargs["transport"] = transport
    else:
        clientKwargs["http2"] = True

    try:
        async with httpx.AsyncClient(**clientKwargs) as cli:
            resp = await cli.get(address, follow_redirects=True)
    except httpx.HTTPError as err:
        raise FetchError(address, str(err) or type(err).__name__) from err

    status = resp.status_code
    if status >= 400:
        raise FetchError(address, f"HTTP {status}: {resp.text[:200]}", status=status)

    logger.debug("GET '%s' -> %d (%d bytes)", address, status, len(resp.content))
    return resp.content



async def fetchBytes(address: str, *, transport: httpx.AsyncBaseTransport | None = None) -> bytes:
    """
    Fetches the whole body at `address`.

    - file://  → local file read, inline on the event loop
    - http(s):// → single GET via httpx, redirects followed, no retries

    Raises FetchError for any failure (missing file, HTTP status >= 400,
    transport error, unsupported scheme).
    """
    scheme = urlparse(address).scheme.lower()
    if scheme == "file":
        return await _readFile(address)
    if scheme in ("http", "https"):
        return await _fetchHttp(address, transport)
    raise FetchError(address, f"Unsupported scheme '{scheme or '<none>'}'")
