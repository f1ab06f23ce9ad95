"""
Shared pytest fixtures for the TorqueHub quote PDF test suite.

PDFs are rendered in memory; helpers below read them back with pypdf
(page count, metadata) and pdfplumber (text, image placements).
"""
import io
import os
import sys
from datetime import datetime, timezone

import pytest

_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from torquehub.forms.image_fetcher import FetchResult, NOT_FOUND  # noqa: E402


# ── Render time ───────────────────────────────────────────────────────────────

RENDER_NOW = datetime(2026, 3, 10, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def render_now():
    """Fixed render time so expiry banners and the footer date are stable."""
    return RENDER_NOW


# ── Images ────────────────────────────────────────────────────────────────────

def make_png(size=(40, 40), color=(200, 30, 30)) -> bytes:
    from PIL import Image
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return make_png()


class StubFetcher:
    """In-memory ImageFetcher: url → FetchResult. Unknown urls are not_found.
    Records every url it was asked for, in order."""

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        return self.results.get(url, FetchResult.fail(NOT_FOUND, url))


@pytest.fixture
def stub_fetcher():
    return StubFetcher


@pytest.fixture
def media_root(tmp_path, png_bytes):
    """MEDIA_ROOT with one real upload and one corrupt file."""
    root = tmp_path / "media"
    (root / "uploads").mkdir(parents=True)
    (root / "uploads" / "front.png").write_bytes(png_bytes)
    (root / "uploads" / "broken.jpg").write_bytes(b"definitely not a jpeg")
    return str(root)


# ── Sample data factories ─────────────────────────────────────────────────────

@pytest.fixture
def sample_quote_dict():
    """Order as the order-lookup service returns it (camelCase, ISO dates)."""
    return {
        "id": "ord-0001",
        "publicToken": "tok123abc",
        "description": "Troca de óleo",
        "status": "PENDING_APPROVAL",
        "totalAmount": 22000,
        "items": [
            {"description": "Óleo 5W30 sintético", "quantity": 2, "unitPrice": 5000},
            {"description": "Mão de obra", "quantity": 1, "unitPrice": 12000},
        ],
        "createdAt": "2026-02-15T10:00:00Z",
        "quoteExpiresAt": None,
        "observations": None,
        "workshop": {
            "name": "Oficina Bom Motor",
            "document": "12345678000199",
            "phone": "(11) 99999-0000",
            "email": "contato@bommotor.com.br",
            "address": "Rua das Flores, 100 - São Paulo/SP",
        },
        "customer": {"name": "Maria Silva"},
        "vehicle": {"plate": "ABC1D23", "brand": "Fiat", "model": "Uno",
                    "year": 2019, "color": "Prata"},
        "media": [],
    }


@pytest.fixture
def make_items():
    """n line items with distinct, searchable descriptions (Peca-001 ...)."""
    def _make(n, unit_price=1000):
        return [{"description": f"Peca-{i:03d}", "quantity": 1, "unitPrice": unit_price}
                for i in range(1, n + 1)]
    return _make


# ── PDF readers ───────────────────────────────────────────────────────────────

def pdf_page_count(pdf: bytes) -> int:
    from pypdf import PdfReader
    return len(PdfReader(io.BytesIO(pdf)).pages)


def pdf_pages_text(pdf: bytes) -> list:
    import pdfplumber
    with pdfplumber.open(io.BytesIO(pdf)) as doc:
        return [page.extract_text() or "" for page in doc.pages]


def pdf_images(pdf: bytes) -> list:
    """[(page_number, x0, top), ...] for every placed image."""
    import pdfplumber
    out = []
    with pdfplumber.open(io.BytesIO(pdf)) as doc:
        for page in doc.pages:
            for img in page.images:
                out.append((page.page_number, round(img["x0"]), round(img["top"])))
    return out
