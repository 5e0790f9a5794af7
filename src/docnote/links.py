"""Documentation URL resolution and browser launching."""

from __future__ import annotations

import logging
import subprocess
import sys
import webbrowser
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_WEB_SCHEMES = ("http", "https")


def _parse_web_url(candidate: str) -> httpx.URL | None:
    """Parse an absolute http(s) URL with a host, or return None."""
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL:
        return None
    if url.scheme not in _WEB_SCHEMES or not url.host:
        return None
    return url


def resolve_url(raw: str) -> str | None:
    """Turn user-entered text into an escaped absolute URL.

    Text that already parses as an http(s) URL is used as-is; text without
    a scheme is retried with ``http://`` in front (so ``example.com/docs``
    works). Returns None when no http(s) URL with a host comes out.
    """
    raw = raw.strip()
    if not raw:
        return None
    url = _parse_web_url(raw)
    if url is None and "://" not in raw:
        url = _parse_web_url(f"http://{raw}")
    return str(url) if url is not None else None


def _platform_open(url: str) -> bool:
    """Open a URL with the OS launcher when the browser module fails."""
    if sys.platform == "darwin":
        args = ["open", url]
    elif sys.platform == "win32":
        args = ["cmd", "/c", "start", "", url]
    else:
        return False
    try:
        subprocess.Popen(args, start_new_session=True)  # noqa: S603
    except OSError:
        logger.warning("Platform launcher %s failed", args[0], exc_info=True)
        return False
    return True


def open_external(
    raw: str,
    opener: Callable[[str], bool] = webbrowser.open,
    fallback: Callable[[str], bool] = _platform_open,
) -> bool:
    """Open a documentation URL in the browser. Returns True on success."""
    url = resolve_url(raw)
    if url is None:
        logger.warning("Invalid URL format: '%s'", raw)
        return False

    logger.info("Opening URL: %s", url)
    try:
        if opener(url):
            return True
    except webbrowser.Error:
        logger.debug("Browser module could not open %s", url, exc_info=True)

    if fallback(url):
        return True
    logger.error("Could not open URL: %s", url)
    return False
