"""
Photo byte loading for the quote PDF.

Media URLs are either absolute http(s) URLs (R2 public bucket) or paths
relative to MEDIA_ROOT (local uploads). A photo that can't be loaded is
never fatal: fetch() returns a failed FetchResult and the media grid skips
that photo.
"""

import io
import os
import logging
from typing import NamedTuple, Optional

import requests
from reportlab.lib.utils import ImageReader

from torquehub.core.paths import MEDIA_ROOT, IMAGE_FETCH_TIMEOUT
from torquehub.forms.quote_model import is_remote_url

log = logging.getLogger("torquehub.images")

# FetchError reasons
NOT_FOUND     = "not_found"
HTTP_STATUS   = "http_status"
NETWORK       = "network"
TIMEOUT       = "timeout"
INVALID_IMAGE = "invalid_image"
UNSAFE_PATH   = "unsafe_path"


class FetchError(NamedTuple):
    reason: str
    detail: str = ""

    def __str__(self):
        return f"{self.reason}: {self.detail}" if self.detail else self.reason


class FetchResult(NamedTuple):
    """Either `data` (image bytes) or `error`, never both."""
    data: Optional[bytes] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None

    @classmethod
    def success(cls, data: bytes) -> "FetchResult":
        return cls(data=data)

    @classmethod
    def fail(cls, reason: str, detail: str = "") -> "FetchResult":
        return cls(error=FetchError(reason, detail))


class ImageFetcher:
    """Loads photo bytes from disk or over HTTP(S).

    Any object with a compatible fetch(url) -> FetchResult can be passed to
    generate_quote_pdf() instead (tests inject failures that way).
    """

    def __init__(self, media_root: str = None, timeout: float = None,
                 session: requests.Session = None):
        self.media_root = os.path.realpath(media_root or MEDIA_ROOT)
        self.timeout = timeout if timeout is not None else IMAGE_FETCH_TIMEOUT
        self.session = session or requests.Session()

    def fetch(self, url: str) -> FetchResult:
        if not url:
            result = FetchResult.fail(NOT_FOUND, "empty url")
        elif is_remote_url(url):
            result = self._fetch_remote(url)
        else:
            result = self._read_local(url)

        if result.ok:
            result = _check_decodable(result.data)
        if not result.ok:
            log.warning("Skipping photo %s (%s)", url, result.error,
                        extra={"url": url, "reason": result.error.reason})
        return result

    # ── remote ────────────────────────────────────────────────────────────────
    def _fetch_remote(self, url: str) -> FetchResult:
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            return FetchResult.fail(TIMEOUT, f"no response in {self.timeout}s")
        except requests.exceptions.RequestException as e:
            return FetchResult.fail(NETWORK, str(e))
        if not 200 <= resp.status_code < 300:
            return FetchResult.fail(HTTP_STATUS, f"HTTP {resp.status_code}")
        return FetchResult.success(resp.content)

    # ── local ─────────────────────────────────────────────────────────────────
    def _read_local(self, url: str) -> FetchResult:
        rel = url.lstrip("/\\")
        path = os.path.realpath(os.path.join(self.media_root, rel))
        if path != self.media_root and not path.startswith(self.media_root + os.sep):
            return FetchResult.fail(UNSAFE_PATH, url)
        if not os.path.isfile(path):
            return FetchResult.fail(NOT_FOUND, path)
        try:
            with open(path, "rb") as f:
                return FetchResult.success(f.read())
        except OSError as e:
            return FetchResult.fail(NOT_FOUND, str(e))


def _check_decodable(data: bytes) -> FetchResult:
    """Make sure reportlab can place the bytes before the grid reserves a cell."""
    try:
        width, height = ImageReader(io.BytesIO(data)).getSize()
    except Exception as e:  # PIL raises a zoo of exception types on bad bytes
        return FetchResult.fail(INVALID_IMAGE, str(e) or type(e).__name__)
    if not width or not height:
        return FetchResult.fail(INVALID_IMAGE, "zero-size image")
    return FetchResult.success(data)
