"""
TorqueHub Quote PDF Generator
=============================
Renders a service quote (orçamento) for a workshop customer as an A4 PDF.

Sections, always in this order, sharing one PageCursor:
  Header → Quote info → Vehicle → Customer → Items (may break pages)
  → Photos (may break pages, skipped when there are none)
  → Observations (only when present) → Footer (last page only)

A render either returns the complete PDF bytes or raises; there is no
partial output. Photos that fail to load are skipped, never fatal.
"""

import io
import time
import logging
from datetime import datetime, timezone
from typing import Callable, NamedTuple, Optional, Union

from reportlab.pdfgen import canvas

from torquehub.forms.image_fetcher import ImageFetcher
from torquehub.forms.quote_layout import PageCursor, PAGE_SIZE, A4_HEIGHT
from torquehub.forms.quote_media import render_media_grid
from torquehub.forms.quote_model import QuoteRecord
from torquehub.forms.quote_sections import (
    BRAND_NAME,
    render_header, render_quote_info, render_vehicle, render_customer,
    render_items_table, render_observations, render_footer,
)
from torquehub.forms.quote_style import quote_pdf_filename

log = logging.getLogger("torquehub.quote_pdf")


class QuotePdf(NamedTuple):
    content: bytes
    filename: str

    @property
    def content_type(self) -> str:
        return "application/pdf"


def generate_quote_pdf(
    quote: Union[QuoteRecord, dict],
    issued_by_name: Optional[str] = None,
    fetcher=None,
    now: Optional[datetime] = None,
) -> bytes:
    """
    Render a quote PDF and return its bytes.

    quote:          QuoteRecord, or the order-lookup dict (see QuoteRecord.from_dict)
    issued_by_name: shown as "Emitido por" when given
    fetcher:        object with fetch(url) -> FetchResult (default: ImageFetcher())
    now:            render time for the expiry banner + "gerado em" date (default: now, UTC)
    """
    if not isinstance(quote, QuoteRecord):
        quote = QuoteRecord.from_dict(quote)
    fetcher = fetcher or ImageFetcher()
    now = now or datetime.now(timezone.utc)
    t0 = time.monotonic()

    log.info("Generating quote PDF for order %s (%d items, %d photos)",
             quote.id, len(quote.items), len(quote.photos),
             extra={"order_id": quote.id, "items": len(quote.items)})

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=PAGE_SIZE)
    c.setTitle(f"Orçamento - {quote.description}")
    c.setAuthor(quote.workshop.name)
    c.setSubject("Orçamento de Serviço Automotivo")
    c.setCreator(BRAND_NAME)

    cur = PageCursor(c, page_height=A4_HEIGHT)
    render_header(cur, quote)
    render_quote_info(cur, quote, issued_by_name)
    render_vehicle(cur, quote)
    render_customer(cur, quote)
    render_items_table(cur, quote)
    placed = render_media_grid(cur, quote, fetcher)
    render_observations(cur, quote)
    render_footer(cur, quote, now)

    c.save()
    pdf = buf.getvalue()

    duration_ms = int((time.monotonic() - t0) * 1000)
    log.info("Quote PDF for order %s: %d page(s), %d photo(s), %d bytes in %dms",
             quote.id, cur.page, placed, len(pdf), duration_ms,
             extra={"order_id": quote.id, "pages": cur.page,
                    "photos": placed, "duration_ms": duration_ms})
    return pdf


def render_quote_for_token(
    token: str,
    lookup: Callable[[str], Union[QuoteRecord, dict, None]],
    issued_by_name: Optional[str] = None,
    fetcher=None,
) -> Optional[QuotePdf]:
    """Look up an order by its public token and render its quote.

    Returns None when the lookup finds nothing (the HTTP layer answers 404).
    """
    found = lookup(token)
    if found is None:
        log.info("Quote PDF requested for unknown token", extra={"token": token})
        return None
    quote = found if isinstance(found, QuoteRecord) else QuoteRecord.from_dict(found)

    content = generate_quote_pdf(quote, issued_by_name, fetcher=fetcher)
    return QuotePdf(content, quote_pdf_filename(quote.description, token))
