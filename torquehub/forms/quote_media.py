"""
Photo grid section of the quote PDF.

Photos are loaded and drawn one at a time, in the order the order lists
them: every draw moves the shared cursor, so grid placement order is load
order. A photo that fails to load is skipped and does not take a cell.
Videos never appear in the PDF.
"""

import io
import logging

from reportlab.lib.utils import ImageReader

from torquehub.forms.quote_layout import (
    PageCursor, MARGIN, INDENT,
    MEDIA_CELL_SIZE, MEDIA_GAP, MEDIA_PER_ROW, MEDIA_ROW_PITCH,
    MEDIA_ROW_BREAK_Y, MEDIA_SECTION_BREAK_Y, SECTION_TITLE_HEIGHT,
)
from torquehub.forms.quote_model import QuoteRecord
from torquehub.forms.quote_sections import section_title
from torquehub.forms.quote_style import COLOR_MUTED, BLACK

log = logging.getLogger("torquehub.quote_pdf")


def cell_x(col: int) -> float:
    return INDENT + col * (MEDIA_CELL_SIZE + MEDIA_GAP)


def render_media_grid(cur: PageCursor, quote: QuoteRecord, fetcher) -> int:
    """Draw photo thumbnails 3 per row. Returns how many photos were placed.

    No photos at all → nothing is drawn and the cursor does not move.
    """
    photos = quote.photos
    if not photos:
        return 0

    if cur.y > MEDIA_SECTION_BREAK_Y:
        cur.new_page()

    start = cur.y
    section_title(cur, "Fotos do Serviço")
    row_y = start + SECTION_TITLE_HEIGHT

    col = 0
    placed = 0
    for photo in photos:
        result = fetcher.fetch(photo.url)
        if not result.ok:
            continue

        # Starting a new row: it must end above the footer band
        if col == 0 and row_y > MEDIA_ROW_BREAK_Y:
            cur.new_page()
            row_y = MARGIN

        x = cell_x(col)
        cur.c.drawImage(ImageReader(io.BytesIO(result.data)), x, cur.Y(row_y) - MEDIA_CELL_SIZE,
                        width=MEDIA_CELL_SIZE, height=MEDIA_CELL_SIZE,
                        preserveAspectRatio=True, anchor="c", mask="auto")

        if photo.caption:
            caption = cur.fit_line(photo.caption, "Helvetica", 7, MEDIA_CELL_SIZE)
            cur.text(x, row_y + MEDIA_CELL_SIZE + 2, caption, "Helvetica", 7, COLOR_MUTED,
                     align="center", width=MEDIA_CELL_SIZE)

        placed += 1
        col += 1
        if col >= MEDIA_PER_ROW:
            col = 0
            row_y += MEDIA_ROW_PITCH

    if placed < len(photos):
        log.info("Order %s: %d of %d photo(s) placed", quote.id, placed, len(photos),
                 extra={"order_id": quote.id, "photos": placed})

    cur.y = row_y + (MEDIA_CELL_SIZE + 30 if col > 0 else 10)
    cur.c.setFillColor(BLACK)
    return placed
