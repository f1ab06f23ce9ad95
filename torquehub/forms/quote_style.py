"""
Colors, status badges and pt-BR formatters shared by the quote PDF sections.
Colors come from the TorqueHub design tokens.
"""

import re
from datetime import datetime
from typing import NamedTuple, Union

from reportlab.lib.colors import Color, HexColor

from torquehub.forms.quote_model import OrderStatus

# ═══════════════════════════════════════════════════════════════════════════════
# DESIGN TOKENS
# ═══════════════════════════════════════════════════════════════════════════════
BRAND_PRIMARY = HexColor("#1A1A2E")
BRAND_ACCENT  = HexColor("#3B82F6")
COLOR_SUCCESS = HexColor("#22C55E")
COLOR_WARNING = HexColor("#F59E0B")
COLOR_DANGER  = HexColor("#EF4444")
COLOR_MUTED   = HexColor("#64748B")
COLOR_BORDER  = HexColor("#E2E8F0")
COLOR_BG      = HexColor("#F8FAFC")   # info box + zebra rows
COLOR_TEXT    = HexColor("#333333")
BLACK         = HexColor("#000000")
WHITE         = HexColor("#FFFFFF")


class StatusStyle(NamedTuple):
    label: str
    color: Color


_STATUS_STYLES = {
    OrderStatus.DRAFT:            StatusStyle("Rascunho", HexColor("#94A3B8")),
    OrderStatus.PENDING_APPROVAL: StatusStyle("Aguardando Aprovação", COLOR_WARNING),
    OrderStatus.APPROVED:         StatusStyle("Aprovada", BRAND_ACCENT),
    OrderStatus.IN_PROGRESS:      StatusStyle("Em Andamento", HexColor("#8B5CF6")),
    OrderStatus.COMPLETED:        StatusStyle("Concluído", COLOR_SUCCESS),
    OrderStatus.CANCELLED:        StatusStyle("Cancelada", COLOR_DANGER),
}


def status_style(status: Union[OrderStatus, str]) -> StatusStyle:
    """Badge label + color. Statuses this renderer doesn't know yet get a gray badge."""
    if isinstance(status, OrderStatus):
        return _STATUS_STYLES[status]
    parsed = OrderStatus.parse(status)
    if isinstance(parsed, OrderStatus):
        return _STATUS_STYLES[parsed]
    return StatusStyle(str(status), COLOR_MUTED)


# ═══════════════════════════════════════════════════════════════════════════════
# pt-BR FORMATTERS
# ═══════════════════════════════════════════════════════════════════════════════

MONTHS_PT = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)


def format_currency(cents: int) -> str:
    """Integer cents → BRL: 123456 -> 'R$ 1.234,56'. Pure integer math."""
    if isinstance(cents, bool) or not isinstance(cents, int):
        raise TypeError(f"cents must be int, got {type(cents).__name__}")
    sign = "-" if cents < 0 else ""
    reais, centavos = divmod(abs(cents), 100)
    grouped = f"{reais:,}".replace(",", ".")
    return f"{sign}R$ {grouped},{centavos:02d}"


def format_date_long(dt: datetime) -> str:
    """'15 de fevereiro de 2026', in dt's own timezone (no conversion).

    Stored timestamps are UTC, so 2026-06-20T01:00Z prints the 20th even though
    it is still the 19th in Brasilia. Pass a local-zone datetime to get the local day.
    """
    return f"{dt.day:02d} de {MONTHS_PT[dt.month - 1]} de {dt.year}"


def format_date_short(dt: datetime) -> str:
    # same timezone rule as format_date_long
    return dt.strftime("%d/%m/%Y")


_NON_DIGIT = re.compile(r"\D")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def format_document(doc: str) -> str:
    """Mask a CNPJ (14 digits) or CPF (11 digits); anything else comes back as-is."""
    digits = _NON_DIGIT.sub("", doc or "")
    if len(digits) == 14:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    if len(digits) == 11:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    return doc


def quote_pdf_filename(description: str, token: str) -> str:
    """orcamento_<description, alnum only, max 30 chars>_<token>.pdf"""
    sanitized = _NON_ALNUM.sub("_", description or "")[:30]
    return f"orcamento_{sanitized}_{token}.pdf"
