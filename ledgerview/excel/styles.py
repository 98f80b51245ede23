"""
Workbook palette: fonts, fills, borders and alignments shared by every sheet.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
NAVY = "0D47A1"
MUTED = "666666"
GRID = "CCCCCC"
TOTAL_EDGE = "999999"
INFLOW = "2E7D32"
OUTFLOW = "C62828"
INFLOW_TINT = "F0FDF4"
OUTFLOW_TINT = "FEF2F2"
TOTAL_TINT = "E3F2FD"
STRIPE = "F5F5F5"


def _font(size: int, color: str = "000000", **kw) -> Font:
    return Font(name="Calibri", size=size, color=color, **kw)


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    return Border(
        left=Side(style="thin", color=color),
        right=Side(style="thin", color=color),
        top=Side(style=top, color=color),
        bottom=Side(style=bottom, color=color),
    )


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = _font(20, NAVY, bold=True)
SUBTITLE_FONT = _font(11, MUTED, italic=True)
SECTION_FONT = _font(13, NAVY, bold=True)
HEADER_FONT = _font(11, "FFFFFF", bold=True)
DATA_FONT = _font(10)
TOTAL_FONT = _font(10, bold=True)
KPI_VALUE_FONT = _font(22, NAVY, bold=True)
KPI_LABEL_FONT = _font(9, MUTED)
POSITIVE_KPI_FONT = _font(22, INFLOW, bold=True)
NEGATIVE_KPI_FONT = _font(22, OUTFLOW, bold=True)
INSIGHT_TITLE_FONT = _font(11, NAVY, bold=True)
INSIGHT_BODY_FONT = _font(10)

# ---------------------------------------------------------------------------
# Fills and borders
# ---------------------------------------------------------------------------
HEADER_FILL = _solid(NAVY)
STRIPE_FILL = _solid(STRIPE)
TOTAL_FILL = _solid(TOTAL_TINT)

HEADER_BORDER = _box(NAVY, bottom="medium")
GRID_BORDER = _box(GRID)
TOTAL_BORDER = _box(TOTAL_EDGE, top="medium", bottom="medium")

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# Row style names produced by the table row_style callables
HIGHLIGHT_FILLS = {
    "green": _solid(INFLOW_TINT),
    "warning": _solid(OUTFLOW_TINT),
    "total": TOTAL_FILL,
}
