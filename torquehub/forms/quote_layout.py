"""
Page geometry and the per-render page cursor for the quote PDF.

All y values in the section code are measured from the TOP of the page
(like the layout sketches); PageCursor.Y() converts to reportlab's
bottom-origin coordinates at draw time.
"""

from typing import List, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit

from torquehub.forms.quote_style import BLACK, COLOR_BORDER

# ═══════════════════════════════════════════════════════════════════════════════
# PAGE GEOMETRY (points)
# ═══════════════════════════════════════════════════════════════════════════════
PAGE_SIZE = A4
PAGE_WIDTH, A4_HEIGHT = A4
PAGE_HEIGHT   = round(A4_HEIGHT)            # 842
MARGIN        = 50
CONTENT_WIDTH = round(PAGE_WIDTH) - 2 * MARGIN   # 495
RIGHT_EDGE    = MARGIN + CONTENT_WIDTH           # 545
INDENT        = MARGIN + 15                      # body text x

# Footer band at the bottom of the last page
FOOTER_HEIGHT = 32
FOOTER_Y      = PAGE_HEIGHT - MARGIN - FOOTER_HEIGHT          # 760

# Header / info box
HEADER_BAND_HEIGHT = 100
HEADER_HEIGHT      = 115      # cursor after the header, whatever it drew
INFO_BOX_HEIGHT    = 85
INFO_BOX_ADVANCE   = 100
INFO_ROW_HEIGHT    = 15
SECTION_TITLE_HEIGHT = 28     # title + separator + gap
SECTION_GAP        = 10

# Items table: the total bar must still fit above the footer
ROW_HEIGHT        = 22
TABLE_HEADER_HEIGHT = 22
TABLE_HEADER_GAP  = 4
TOTAL_BAR_GAP     = 8
TOTAL_BAR_HEIGHT  = 32
ITEMS_BREAK_Y     = FOOTER_Y - TOTAL_BAR_GAP - TOTAL_BAR_HEIGHT  # 720

# Photo grid: a row (image + caption) must end above the footer band
MEDIA_CELL_SIZE      = 120
MEDIA_GAP            = 15
MEDIA_PER_ROW        = 3
MEDIA_CAPTION_HEIGHT = 10
MEDIA_ROW_PITCH      = MEDIA_CELL_SIZE + 25
# Derived from the footer band, not the flat 650/600 of the earlier layout:
# a row starting at 640 would run its caption into the footer.
MEDIA_ROW_BREAK_Y    = FOOTER_Y - MEDIA_CELL_SIZE - MEDIA_CAPTION_HEIGHT   # 630
MEDIA_SECTION_BREAK_Y = MEDIA_ROW_BREAK_Y - SECTION_TITLE_HEIGHT           # 602

# Observations
OBS_WIDTH       = CONTENT_WIDTH - 30
OBS_FONT_SIZE   = 10
OBS_LINE_HEIGHT = 13


def plan_rows(first_y: float, count: int, row_height: float = ROW_HEIGHT,
              limit: float = ITEMS_BREAK_Y, top: float = MARGIN) -> List[Tuple[int, float]]:
    """Place `count` fixed-height rows starting at first_y.

    Returns [(page_offset, y), ...]. A row is never split: a row whose bottom
    would pass `limit` moves whole to the next page, starting at `top`.
    """
    placements = []
    page_offset = 0
    y = first_y
    for _ in range(count):
        if y + row_height > limit:
            page_offset += 1
            y = top
        placements.append((page_offset, y))
        y += row_height
    return placements


class PageCursor:
    """Mutable drawing position for ONE render call.

    Owns the reportlab canvas for the duration of the render; every section
    reads `y` and leaves it below whatever it drew.
    """

    def __init__(self, c, page_height: float = A4_HEIGHT, y: float = 0):
        self.c = c
        self.y = y
        self.page = 1
        self._page_height = page_height

    # pdf y = from bottom; layout y = from top
    def Y(self, top_y: float) -> float:
        return self._page_height - top_y

    def new_page(self):
        self.c.showPage()
        self.page += 1
        self.y = MARGIN

    def ensure_room(self, height: float, limit: float) -> bool:
        """Start a new page if `height` more points would pass `limit`."""
        if self.y + height > limit:
            self.new_page()
            return True
        return False

    # ── primitives ────────────────────────────────────────────────────────────
    def text(self, x, yt, txt, font="Helvetica", size=10, color=BLACK,
             align="left", width=None):
        """Draw one line with its top at yt. For center/right, x is the box left
        edge and `width` the box width."""
        c = self.c
        c.setFont(font, size)
        c.setFillColor(color)
        s = str(txt) if txt is not None else ""
        baseline = self.Y(yt) - size * 0.8
        if align == "right":
            c.drawRightString(x + (width or 0), baseline, s)
        elif align == "center":
            c.drawCentredString(x + (width or 0) / 2, baseline, s)
        else:
            c.drawString(x, baseline, s)

    def rect(self, x, yt, w, h, fill=None, stroke=None, radius=0):
        c = self.c
        if fill is not None:
            c.setFillColor(fill)
        if stroke is not None:
            c.setStrokeColor(stroke)
            c.setLineWidth(1)
        args = (x, self.Y(yt) - h, w, h)
        kw = {"fill": 1 if fill is not None else 0, "stroke": 1 if stroke is not None else 0}
        if radius:
            c.roundRect(*args, radius, **kw)
        else:
            c.rect(*args, **kw)

    def separator(self, yt: float):
        c = self.c
        c.setStrokeColor(COLOR_BORDER)
        c.setLineWidth(1)
        c.line(MARGIN, self.Y(yt), RIGHT_EDGE, self.Y(yt))

    def wrap(self, txt: str, font: str, size: float, width: float) -> List[str]:
        lines = []
        for para in str(txt).splitlines() or [""]:
            lines.extend(simpleSplit(para, font, size, width) or [""])
        return lines

    def fit_line(self, txt: str, font: str, size: float, width: float) -> str:
        """Cut txt to one line of `width`, marking the cut with '...'."""
        s = " ".join(str(txt).split())
        if self.c.stringWidth(s, font, size) <= width:
            return s
        while s and self.c.stringWidth(s + "...", font, size) > width:
            s = s[:-1]
        return s.rstrip() + "..."
