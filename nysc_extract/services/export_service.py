from __future__ import annotations

import io
import time
from typing import Any, Callable, List, Sequence
from xml.sax.saxutils import escape

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from nysc_extract.config import DEFAULT_ATTENDANCE_TYPE, DEFAULT_DAY, OFFICIAL_PDF, PLAIN_PDF
from nysc_extract.models import CorpsMember, ExtractionMetadata
from nysc_extract.services.roster import compute_stats, group_by_ppa

PAGE_SIZE = landscape(A4)
MARGIN = 14 * mm


def _rgb(t) -> colors.Color:
    r, g, b = t
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


# ---------------------------
# CSV
# ---------------------------
def to_csv(
    members: Sequence[CorpsMember],
    include_phone: bool = True,
    include_ppa: bool = True,
    include_attendance: bool = False,
) -> str:
    columns = ["SN", "State Code", "Surname", "First Name", "Middle Name", "Gender"]
    if include_phone:
        columns.append("Phone")
    if include_ppa:
        columns.append("PPA")
    if include_attendance:
        columns += ["Type", "Day"]

    rows = []
    for m in members:
        row = [m.sn, m.state_code, m.surname, m.first_name, m.middle_name, m.gender]
        if include_phone:
            row.append(m.phone)
        if include_ppa:
            row.append(m.company_name)
        if include_attendance:
            row += [m.attendance_type or DEFAULT_ATTENDANCE_TYPE, m.day or DEFAULT_DAY]
        rows.append(row)

    return pd.DataFrame(rows, columns=columns).to_csv(index=False)


def export_filename(mode: str, ext: str, now: float | None = None) -> str:
    stamp = int((time.time() if now is None else now) * 1000)
    return f"NYSC_{mode.upper()}_{stamp}.{ext}"


# ---------------------------
# PDF
# ---------------------------
CONTENT_WIDTH = PAGE_SIZE[0] - 2 * MARGIN

# Relative column widths, scaled to CONTENT_WIDTH. Long values wrap inside their cell.
PLAIN_COLUMNS = [
    ("SN", 5),
    ("State Code", 13),
    ("Full Name", 26),
    ("Gender", 7),
    ("Phone", 13),
    ("Organization (PPA)", 36),
]
OFFICIAL_COLUMN_WEIGHTS = {
    "SN": 4,
    "State Code": 12,
    "Surname": 11,
    "Firstname": 11,
    "Middle Name": 11,
    "Gender": 7,
    "Phone": 12,
    "PPA / Organization": 26,
    "Type": 9,
    "Day": 8,
}


def _col_widths(weights: Sequence[float]) -> List[float]:
    total = float(sum(weights))
    return [CONTENT_WIDTH * w / total for w in weights]


def _cell_styles(font_size: float, head_color: colors.Color = colors.black):
    head = ParagraphStyle(
        "CellHead", fontName="Helvetica-Bold", fontSize=font_size,
        leading=font_size * 1.2, textColor=head_color,
    )
    body = ParagraphStyle("CellBody", fontName="Helvetica", fontSize=font_size, leading=font_size * 1.2)
    return head, body


def _cells(data: List[List[Any]], head: ParagraphStyle, body: ParagraphStyle) -> List[List[Paragraph]]:
    out = []
    for i, row in enumerate(data):
        style = head if i == 0 else body
        out.append([Paragraph(escape("" if v is None else str(v)), style) for v in row])
    return out


def _build(story: List[Any], top_margin: float = MARGIN, on_page: Callable | None = None) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=PAGE_SIZE,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=top_margin,
        bottomMargin=MARGIN,
    )
    if on_page is None:
        doc.build(story)
    else:
        doc.build(story, onFirstPage=on_page, onLaterPages=on_page)
    return buf.getvalue()


def _plain_table(data: List[List[Any]]) -> Table:
    theme = PLAIN_PDF
    head, body = _cell_styles(theme["font_size"], _rgb(theme["header_text"]))
    table = Table(
        _cells(data, head, body),
        colWidths=_col_widths([w for _, w in PLAIN_COLUMNS]),
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), _rgb(theme["header_fill"])),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, _rgb(theme["stripe_fill"])]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
    ]))
    return table


def _plain_rows(members: Sequence[CorpsMember]) -> List[List[Any]]:
    head = [name for name, _ in PLAIN_COLUMNS]
    body = [[m.sn, m.state_code, m.full_name, m.gender, m.phone, m.company_name] for m in members]
    return [head, *body]


def build_plain_pdf(members: Sequence[CorpsMember], metadata: ExtractionMetadata) -> bytes:
    """Internal list: title, M/F counts and a striped table."""
    styles = getSampleStyleSheet()
    title = ParagraphStyle("PlainTitle", parent=styles["Heading1"], fontSize=20, alignment=TA_LEFT)
    stats = compute_stats(members)

    story: List[Any] = [
        Paragraph(escape(f"Personnel List: {metadata.lga or 'Extracted List'}"), title),
        Paragraph(
            f"Total: {stats['total']} | Male: {stats['males']} | Female: {stats['females']}",
            styles["Normal"],
        ),
        Spacer(1, 4 * mm),
        _plain_table(_plain_rows(members)),
    ]
    return _build(story)


def build_grouped_pdf(members: Sequence[CorpsMember], metadata: ExtractionMetadata) -> bytes:
    """One section per PPA, each with its own count and table."""
    styles = getSampleStyleSheet()
    story: List[Any] = [
        Paragraph(escape(f"PPA Directory: {metadata.lga or 'Extracted List'}"), styles["Heading1"]),
    ]
    for ppa, group in sorted(group_by_ppa(members).items()):
        stats = compute_stats(group)
        story.append(Paragraph(
            escape(f"{ppa} ({stats['total']}: {stats['males']} M / {stats['females']} F)"),
            styles["Heading3"],
        ))
        story.append(_plain_table(_plain_rows(group)))
        story.append(Spacer(1, 6 * mm))
    return _build(story)


def _official_header(metadata: ExtractionMetadata) -> Callable:
    theme = OFFICIAL_PDF
    width, height = PAGE_SIZE

    def draw(canvas, _doc):
        # the y coordinates mirror a top-down layout measured in mm
        def y(v_mm: float) -> float:
            return height - v_mm * mm

        canvas.saveState()
        # logo placeholder
        canvas.setStrokeColor(colors.black)
        canvas.setLineWidth(0.3)
        canvas.circle(28 * mm, y(25), 14 * mm)
        canvas.setFont("Helvetica-Bold", 7)
        canvas.drawCentredString(28 * mm, y(24), "NYSC")
        canvas.drawCentredString(28 * mm, y(28), "LOGO")

        cx = width / 2 + 10 * mm
        canvas.setFont("Helvetica-Bold", 26)
        canvas.setFillColor(_rgb(theme["brand_green"]))
        canvas.drawCentredString(cx, y(22), theme["heading"])

        canvas.setFillColor(colors.black)
        canvas.setFont("Helvetica-Bold", 18)
        canvas.drawCentredString(cx, y(31), metadata.lga or "Mani Local Government")
        canvas.setFont("Helvetica-Bold", 16)
        canvas.drawCentredString(
            cx, y(40), f"{metadata.title or 'Monthly Clearance'} for {metadata.batch_info or 'Batch B'}"
        )

        canvas.setFont("Courier", 10)
        canvas.setFillColor(_rgb(theme["date_grey"]))
        canvas.drawRightString(width - MARGIN, y(48), f"Date Printed: {metadata.date_printed or ''}")

        canvas.setStrokeColor(_rgb(theme["rule_blue"]))
        canvas.setLineWidth(1.2 * mm)
        canvas.line(MARGIN, y(52), width - MARGIN, y(52))
        canvas.restoreState()

    return draw


def build_official_pdf(
    members: Sequence[CorpsMember],
    metadata: ExtractionMetadata,
    show_phone: bool = True,
    show_ppa: bool = True,
) -> bytes:
    """Replica of the Monthly Clearance sheet with optional Phone/PPA columns."""
    head = ["SN", "State Code", "Surname", "Firstname", "Middle Name", "Gender"]
    if show_phone:
        head.append("Phone")
    if show_ppa:
        head.append("PPA / Organization")
    head += ["Type", "Day"]

    body = []
    for m in members:
        row = [m.sn, m.state_code, m.surname, m.first_name, m.middle_name or "", m.gender]
        if show_phone:
            row.append(m.phone)
        if show_ppa:
            row.append(m.company_name)
        row += [m.attendance_type or DEFAULT_ATTENDANCE_TYPE, m.day or DEFAULT_DAY]
        body.append(row)

    head_style, body_style = _cell_styles(OFFICIAL_PDF["font_size"])
    table = Table(
        _cells([head, *body], head_style, body_style),
        colWidths=_col_widths([OFFICIAL_COLUMN_WEIGHTS[h] for h in head]),
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.3, colors.black),
        ("BACKGROUND", (0, 0), (-1, 0), colors.white),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return _build([table], top_margin=56 * mm, on_page=_official_header(metadata))
