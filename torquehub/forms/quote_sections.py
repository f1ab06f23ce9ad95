"""
Section renderers for the quote PDF (everything but the photo grid).

Each render_* takes the render's PageCursor and the QuoteRecord, draws its
section starting at cursor.y and leaves cursor.y below what it drew.
Order is fixed by quote_pdf.generate_quote_pdf().
"""

import logging
from datetime import datetime
from typing import Optional

from torquehub.forms.quote_expiry import is_expired
from torquehub.forms.quote_layout import (
    PageCursor, plan_rows,
    PAGE_WIDTH, MARGIN, CONTENT_WIDTH, RIGHT_EDGE, INDENT,
    HEADER_BAND_HEIGHT, HEADER_HEIGHT, INFO_BOX_HEIGHT, INFO_BOX_ADVANCE,
    INFO_ROW_HEIGHT, SECTION_TITLE_HEIGHT, SECTION_GAP,
    ROW_HEIGHT, TABLE_HEADER_HEIGHT, TABLE_HEADER_GAP, ITEMS_BREAK_Y,
    TOTAL_BAR_GAP, TOTAL_BAR_HEIGHT, FOOTER_Y,
    OBS_WIDTH, OBS_FONT_SIZE, OBS_LINE_HEIGHT,
)
from torquehub.forms.quote_model import QuoteRecord
from torquehub.forms.quote_style import (
    BRAND_PRIMARY, COLOR_BG, COLOR_BORDER, COLOR_MUTED, COLOR_TEXT,
    COLOR_SUCCESS, COLOR_DANGER, BLACK, WHITE,
    status_style, format_currency, format_date_long, format_date_short,
    format_document,
)

log = logging.getLogger("torquehub.quote_pdf")

BRAND_NAME = "TorqueHub"

# Items table columns: (x, width)
COL_DESC  = (INDENT, 260)
COL_QTY   = (340, 50)
COL_UNIT  = (400, 65)
COL_TOTAL = (475, 65)

STATUS_PILL_X = RIGHT_EDGE - 165   # 380
STATUS_PILL_W = 150
STATUS_PILL_H = 28


def section_title(cur: PageCursor, title: str):
    """Bold brand-colored title + separator; cursor ends just under the rule."""
    start = cur.y
    cur.text(MARGIN, start, title, "Helvetica-Bold", 13, BRAND_PRIMARY)
    cur.separator(start + 18)
    cur.y = start + 25


def _label_rows(cur: PageCursor, rows):
    for label, value in rows:
        lbl = f"{label}:"
        cur.text(INDENT, cur.y, lbl, "Helvetica", 10, COLOR_MUTED)
        vx = INDENT + cur.c.stringWidth(lbl + "  ", "Helvetica", 10)
        cur.text(vx, cur.y, value, "Helvetica-Bold", 10, BLACK)
        cur.y += INFO_ROW_HEIGHT
    cur.y += SECTION_GAP


# ═══════════════════════════════════════════════════════════════════════════════
# HEADER: workshop banner
# ═══════════════════════════════════════════════════════════════════════════════

def render_header(cur: PageCursor, quote: QuoteRecord):
    ws = quote.workshop

    cur.rect(0, 0, PAGE_WIDTH, HEADER_BAND_HEIGHT, fill=BRAND_PRIMARY)
    cur.text(MARGIN, 25, ws.name, "Helvetica-Bold", 22, WHITE)

    if ws.document:
        cur.text(MARGIN, 52, f"CNPJ/CPF: {format_document(ws.document)}", "Helvetica", 10, WHITE)

    contact = " | ".join(p for p in (ws.phone, ws.email) if p)
    if contact:
        cur.text(MARGIN, 66, contact, "Helvetica", 10, WHITE)

    if ws.address:
        cur.text(MARGIN, 80, ws.address, "Helvetica", 10, WHITE)

    # Fixed height: long content simply runs past it
    cur.y = HEADER_HEIGHT


# ═══════════════════════════════════════════════════════════════════════════════
# QUOTE INFO BOX: title, dates, issuer, status pill
# ═══════════════════════════════════════════════════════════════════════════════

def render_quote_info(cur: PageCursor, quote: QuoteRecord, issued_by_name: Optional[str]):
    start = cur.y

    cur.rect(MARGIN, start, CONTENT_WIDTH, INFO_BOX_HEIGHT, fill=COLOR_BG, stroke=COLOR_BORDER)
    cur.text(INDENT, start + 10, "ORÇAMENTO DE SERVIÇO", "Helvetica-Bold", 16, BRAND_PRIMARY)
    cur.text(INDENT, start + 32, f"Emitido em: {format_date_long(quote.created_at)}",
             "Helvetica", 9, COLOR_MUTED)

    if quote.quote_expires_at:
        cur.text(INDENT, start + 45, f"Válido até: {format_date_long(quote.quote_expires_at)}",
                 "Helvetica", 9, COLOR_MUTED)

    if issued_by_name:
        cur.text(INDENT, start + 58, f"Emitido por: {issued_by_name}", "Helvetica", 9, COLOR_MUTED)

    style = status_style(quote.status)
    cur.rect(STATUS_PILL_X, start + 12, STATUS_PILL_W, STATUS_PILL_H, fill=style.color, radius=4)
    cur.text(STATUS_PILL_X, start + 19, style.label, "Helvetica-Bold", 11, WHITE,
             align="center", width=STATUS_PILL_W)

    cur.y = start + INFO_BOX_ADVANCE


# ═══════════════════════════════════════════════════════════════════════════════
# VEHICLE / CUSTOMER
# ═══════════════════════════════════════════════════════════════════════════════

def render_vehicle(cur: PageCursor, quote: QuoteRecord):
    v = quote.vehicle
    section_title(cur, "Veículo")

    rows = [
        ("Veículo", f"{v.brand} {v.model}".strip()),
        ("Placa", v.plate),
    ]
    if v.year:
        rows.append(("Ano", str(v.year)))
    if v.color:
        rows.append(("Cor", v.color))
    _label_rows(cur, rows)


def render_customer(cur: PageCursor, quote: QuoteRecord):
    section_title(cur, "Cliente")
    _label_rows(cur, [("Nome", quote.customer.name)])


# ═══════════════════════════════════════════════════════════════════════════════
# ITEMS TABLE: zebra rows, page breaks, total bar
# ═══════════════════════════════════════════════════════════════════════════════

def _draw_table_header(cur: PageCursor, top: float):
    cur.rect(MARGIN, top, CONTENT_WIDTH, TABLE_HEADER_HEIGHT, fill=BRAND_PRIMARY)
    ty = top + 6
    cur.text(COL_DESC[0], ty, "Descrição", "Helvetica-Bold", 9, WHITE)
    cur.text(COL_QTY[0], ty, "Qtd", "Helvetica-Bold", 9, WHITE, align="center", width=COL_QTY[1])
    cur.text(COL_UNIT[0], ty, "Unit.", "Helvetica-Bold", 9, WHITE, align="right", width=COL_UNIT[1])
    cur.text(COL_TOTAL[0], ty, "Subtotal", "Helvetica-Bold", 9, WHITE, align="right", width=COL_TOTAL[1])


def render_items_table(cur: PageCursor, quote: QuoteRecord) -> int:
    """Draw the items table. Returns the number of page breaks it emitted."""
    items = quote.items
    items_sum = quote.items_total()
    if items_sum != quote.total_amount:
        # Stored total is what the customer approved; show it, just flag the drift
        log.warning("Order %s: totalAmount %d != items sum %d",
                    quote.id, quote.total_amount, items_sum,
                    extra={"order_id": quote.id})

    section_title(cur, "Itens do Serviço")
    table_top = cur.y + 3
    _draw_table_header(cur, table_top)

    first_row_y = table_top + TABLE_HEADER_HEIGHT + TABLE_HEADER_GAP
    placements = plan_rows(first_row_y, len(items), ROW_HEIGHT, ITEMS_BREAK_Y, MARGIN)

    breaks = 0
    row_y = first_row_y
    for idx, (item, (page_offset, row_y)) in enumerate(zip(items, placements)):
        while breaks < page_offset:
            cur.new_page()
            breaks += 1

        if idx % 2 == 0:
            cur.rect(MARGIN, row_y - 2, CONTENT_WIDTH, ROW_HEIGHT - 2, fill=COLOR_BG)

        ty = row_y + 4
        desc = cur.fit_line(item.description, "Helvetica", 9, COL_DESC[1])
        cur.text(COL_DESC[0], ty, desc, "Helvetica", 9, BLACK)
        cur.text(COL_QTY[0], ty, str(item.quantity), "Helvetica", 9, BLACK,
                 align="center", width=COL_QTY[1])
        cur.text(COL_UNIT[0], ty, format_currency(item.unit_price), "Helvetica", 9, BLACK,
                 align="right", width=COL_UNIT[1])
        cur.text(COL_TOTAL[0], ty, format_currency(item.line_total), "Helvetica-Bold", 9, BLACK,
                 align="right", width=COL_TOTAL[1])

    end_y = row_y + ROW_HEIGHT if items else first_row_y

    # ── Total bar: the stored total, never recomputed ────────────────────────
    total_y = end_y + TOTAL_BAR_GAP
    bar_x = COL_QTY[0]
    bar_w = RIGHT_EDGE - bar_x
    cur.rect(bar_x, total_y, bar_w, TOTAL_BAR_HEIGHT, fill=BRAND_PRIMARY, stroke=BRAND_PRIMARY)
    cur.text(bar_x + 15, total_y + 10, "TOTAL", "Helvetica-Bold", 12, WHITE)
    cur.text(bar_x + 80, total_y + 10, format_currency(quote.total_amount), "Helvetica-Bold", 12,
             WHITE, align="right", width=bar_w - 90)

    cur.y = total_y + TOTAL_BAR_HEIGHT + 18
    return breaks


# ═══════════════════════════════════════════════════════════════════════════════
# OBSERVATIONS (optional) + FOOTER
# ═══════════════════════════════════════════════════════════════════════════════

def render_observations(cur: PageCursor, quote: QuoteRecord) -> bool:
    """Draw free-text observations; returns False (and draws nothing) if there are none."""
    text = (quote.observations or "").strip()
    if not text:
        return False

    lines = cur.wrap(text, "Helvetica", OBS_FONT_SIZE, OBS_WIDTH)
    cur.ensure_room(SECTION_TITLE_HEIGHT + OBS_LINE_HEIGHT, FOOTER_Y)

    section_title(cur, "Observações")
    y = cur.y + 3
    for line in lines:
        if y + OBS_LINE_HEIGHT > FOOTER_Y:
            cur.new_page()
            y = cur.y
        cur.text(INDENT, y, line, "Helvetica", OBS_FONT_SIZE, COLOR_TEXT)
        y += OBS_LINE_HEIGHT

    cur.y = y + 15
    return True


def footer_expiry_line(quote: QuoteRecord, now: datetime):
    """(text, color) for the validity banner, or None when no expiry was communicated."""
    expires_at = quote.quote_expires_at
    if expires_at is None:
        return None
    if is_expired(expires_at, now):
        return "ATENÇÃO: Este orçamento está EXPIRADO.", COLOR_DANGER
    return f"Orçamento válido até {format_date_long(expires_at)}.", COLOR_SUCCESS


def render_footer(cur: PageCursor, quote: QuoteRecord, now: datetime):
    """Drawn once, at a fixed position on whatever page rendering has reached."""
    cur.separator(FOOTER_Y)

    banner = footer_expiry_line(quote, now)
    if banner:
        text, color = banner
        cur.text(MARGIN, FOOTER_Y + 8, text, "Helvetica-Bold", 8, color,
                 align="center", width=CONTENT_WIDTH)

    cur.text(MARGIN, FOOTER_Y + 24,
             f"Documento gerado automaticamente por {BRAND_NAME} - {format_date_short(now)}",
             "Helvetica", 8, COLOR_MUTED, align="center", width=CONTENT_WIDTH)
