"""
Generazione dei report PDF stampabili (desglose mensile e riepilogo mensile).

Trasformazione pura dai dati aggregati ai byte del documento: l'impaginazione
(salto pagina quando il contenuto supera l'area utile) è gestita da platypus,
il piè di pagina con numero pagina e data viene disegnato su ogni pagina.
"""
from __future__ import annotations

import functools
import io
from datetime import date
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from commissions.services.aggregation_service import CategoryGroup, MonthlyBreakdown, MonthlySummary
from commissions.services.dto.month import MONTH_SHORT_NAMES
from commissions.services.formatting_service import format_currency, format_int, format_percentage
from commissions.services.logging import log_structured_event

# Grigi chiari pensati per la stampa
DARK_GREY = colors.HexColor("#404040")
MEDIUM_GREY = colors.HexColor("#666666")
LIGHT_GREY = colors.HexColor("#888888")
VERY_LIGHT_GREY = colors.HexColor("#e5e5e5")
BACKGROUND = colors.HexColor("#f8f8f8")
ROW_ALT = colors.HexColor("#fafafa")
BORDER = colors.HexColor("#d0d0d0")
SUCCESS = colors.HexColor("#2d8a4e")

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 15 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN


class FooterCanvas(canvas.Canvas):
    """Canvas che rimanda il disegno del piè di pagina a fine documento, per conoscere il totale pagine."""

    def __init__(self, *args, footer_text: str = "", **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []
        self._footer_text = footer_text

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total_pages)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_footer(self, total_pages: int) -> None:
        self.saveState()
        self.setFont("Helvetica", 7)
        self.setFillColor(LIGHT_GREY)
        self.drawCentredString(
            PAGE_WIDTH / 2,
            8 * mm,
            f"Pagina {self._pageNumber} di {total_pages}  •  {self._footer_text}",
        )
        self.restoreState()


def _money(value) -> str:
    return f"${format_int(value)}"


def _money_cents(value) -> str:
    return f"${format_currency(value)}"


def _short_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return f"{value.day} {MONTH_SHORT_NAMES[value.month - 1]} {value.year}"


def _numeric_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle",
            parent=base["Heading1"],
            fontSize=16,
            textColor=DARK_GREY,
            alignment=TA_CENTER,
            spaceAfter=4,
        ),
        "subtitle": ParagraphStyle(
            "ReportSubtitle",
            parent=base["Normal"],
            fontSize=10,
            textColor=MEDIUM_GREY,
            alignment=TA_CENTER,
            spaceAfter=2,
        ),
        "section": ParagraphStyle(
            "ReportSection",
            parent=base["Heading3"],
            fontSize=11,
            textColor=DARK_GREY,
            spaceBefore=8,
            spaceAfter=6,
        ),
        "summary": ParagraphStyle(
            "ReportSummary",
            parent=base["Normal"],
            fontSize=8,
            textColor=DARK_GREY,
            fontName="Helvetica-Bold",
        ),
    }


def _build_document(elements: list, footer_text: str) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=MARGIN,
        leftMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=20 * mm,
    )
    doc.build(elements, canvasmaker=functools.partial(FooterCanvas, footer_text=footer_text))
    return buffer.getvalue()


def _header(title: str, subtitle: str, styles: dict, seller_name: Optional[str] = None) -> list:
    rows = [[Paragraph(escape(title), styles["title"])], [Paragraph(escape(subtitle), styles["subtitle"])]]
    if seller_name:
        rows.append([Paragraph(f"Venditore: {escape(seller_name)}", styles["subtitle"])])
    table = Table(rows, colWidths=[CONTENT_WIDTH])
    table.setStyle(
        TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), VERY_LIGHT_GREY),
            ("BOX", (0, 0), (-1, -1), 0.5, BORDER),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ])
    )
    return [table, Spacer(1, 6 * mm)]


def _entries_table(group: CategoryGroup) -> Table:
    data = [["Data", "NCF", "Importo"]]
    for entry in group.entries:
        data.append([_short_date(entry.date), entry.ncf, _money(entry.amount)])
    table = Table(data, colWidths=[30 * mm, CONTENT_WIDTH - 60 * mm, 30 * mm], repeatRows=1)
    table.setStyle(
        TableStyle([
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("TEXTCOLOR", (0, 0), (-1, 0), DARK_GREY),
            ("TEXTCOLOR", (0, 1), (-1, -1), MEDIUM_GREY),
            ("BACKGROUND", (0, 0), (-1, 0), BACKGROUND),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ROW_ALT]),
            ("GRID", (0, 0), (-1, -1), 0.1, BORDER),
            ("ALIGN", (2, 0), (2, -1), "RIGHT"),
        ])
    )
    return table


def _group_section(title: str, percentage_label: str, group: CategoryGroup) -> list:
    header = Table([[title, percentage_label]], colWidths=[CONTENT_WIDTH * 0.7, CONTENT_WIDTH * 0.3])
    header.setStyle(
        TableStyle([
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("TEXTCOLOR", (0, 0), (-1, -1), DARK_GREY),
            ("BACKGROUND", (0, 0), (-1, -1), VERY_LIGHT_GREY),
            ("BOX", (0, 0), (-1, -1), 0.5, BORDER),
            ("ALIGN", (1, 0), (1, 0), "RIGHT"),
        ])
    )

    commission_label = f"Commissione ({percentage_label}):" if percentage_label else "Commissione:"
    totals = Table(
        [
            ["Subtotale:", _money(group.total_amount)],
            [commission_label, _money(group.total_commission)],
        ],
        colWidths=[CONTENT_WIDTH - 35 * mm, 35 * mm],
    )
    totals.setStyle(
        TableStyle([
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
            ("TEXTCOLOR", (0, 0), (-1, 0), MEDIUM_GREY),
            ("FONTNAME", (1, 0), (1, 0), "Helvetica-Bold"),
            ("TEXTCOLOR", (0, 1), (-1, 1), SUCCESS),
            ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Bold"),
            ("LINEABOVE", (0, 0), (-1, 0), 0.3, BORDER),
        ])
    )
    # Intestazione e prima riga della tabella non vanno separate da un salto pagina
    return [KeepTogether([header, Spacer(1, 2 * mm)]), _entries_table(group), totals, Spacer(1, 6 * mm)]


def _total_box(label: str, value: str) -> Table:
    table = Table([[label, value]], colWidths=[CONTENT_WIDTH * 0.6, CONTENT_WIDTH * 0.4])
    table.setStyle(
        TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), BACKGROUND),
            ("BOX", (0, 0), (-1, -1), 0.5, SUCCESS),
            ("FONTSIZE", (0, 0), (0, 0), 10),
            ("TEXTCOLOR", (0, 0), (0, 0), MEDIUM_GREY),
            ("FONTNAME", (1, 0), (1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (1, 0), (1, 0), 16),
            ("TEXTCOLOR", (1, 0), (1, 0), SUCCESS),
            ("ALIGN", (1, 0), (1, 0), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 8),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ])
    )
    return table


def render_breakdown_pdf(
    breakdown: MonthlyBreakdown,
    seller_name: Optional[str] = None,
    generated_on: Optional[date] = None,
) -> bytes:
    """Report "desglose": una sezione per categoria con le singole fatture, più il resto e il totale."""
    generated_on = generated_on or date.today()
    styles = _styles()
    month_label = breakdown.month.label
    elements: List = _header(
        "DETTAGLIO MENSILE DELLE COMMISSIONI", month_label.upper(), styles, seller_name
    )

    has_rest = breakdown.rest.total_amount > 0
    summary_text = f"{len(breakdown.groups)} prodotto/i con commissioni variabili"
    if has_rest:
        summary_text += f" + resto ({format_percentage(breakdown.rest.percentage) or 'varie'})"
    summary_text += f" • {breakdown.distinct_ncf_count} fatture"
    summary = Table(
        [[Paragraph(escape(summary_text), styles["summary"]), f"Totale: {_money(breakdown.grand_total_commission)}"]],
        colWidths=[CONTENT_WIDTH * 0.7, CONTENT_WIDTH * 0.3],
    )
    summary.setStyle(
        TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), BACKGROUND),
            ("BOX", (0, 0), (-1, -1), 0.5, BORDER),
            ("FONTNAME", (1, 0), (1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (1, 0), (1, 0), 12),
            ("TEXTCOLOR", (1, 0), (1, 0), SUCCESS),
            ("ALIGN", (1, 0), (1, 0), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ])
    )
    elements += [summary, Spacer(1, 6 * mm), Paragraph("DETTAGLIO PER PRODOTTO", styles["section"])]

    for group in breakdown.groups:
        elements += _group_section(group.name, format_percentage(group.percentage), group)

    if has_rest:
        elements += _group_section(
            "Resto dei prodotti", format_percentage(breakdown.rest.percentage), breakdown.rest
        )

    elements.append(_total_box("COMMISSIONE TOTALE DEL MESE", _money(breakdown.grand_total_commission)))

    pdf = _build_document(
        elements, f"{month_label}  •  Generato: {_short_date(generated_on)}"
    )
    log_structured_event(
        "report_rendered",
        message="Report desglose generato",
        kind="breakdown",
        month=breakdown.month.key,
        size_bytes=len(pdf),
    )
    return pdf


def _summary_cards(summary: MonthlySummary) -> Table:
    data = [
        ["FATTURE", "VENDITE", "LA TUA COMMISSIONE"],
        [str(summary.invoice_count), _money(summary.total_sales), _money(summary.total_commission)],
    ]
    card_width = 55 * mm
    table = Table(data, colWidths=[card_width] * 3)
    table.setStyle(
        TableStyle([
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("FONTSIZE", (0, 0), (-1, 0), 8),
            ("TEXTCOLOR", (0, 0), (-1, 0), LIGHT_GREY),
            ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 1), (-1, 1), 13),
            ("TEXTCOLOR", (0, 1), (1, 1), DARK_GREY),
            ("TEXTCOLOR", (2, 1), (2, 1), SUCCESS),
            ("BACKGROUND", (0, 0), (-1, -1), BACKGROUND),
            ("BOX", (0, 0), (0, -1), 0.5, BORDER),
            ("BOX", (1, 0), (1, -1), 0.5, BORDER),
            ("BOX", (2, 0), (2, -1), 0.5, SUCCESS),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ])
    )
    return table


def _plain_table(data: list, col_widths: list, right_cols: List[int], highlight_col: int) -> Table:
    table = Table(data, colWidths=col_widths, repeatRows=1)
    style = [
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("TEXTCOLOR", (0, 0), (-1, 0), DARK_GREY),
        ("TEXTCOLOR", (0, 1), (-1, -1), MEDIUM_GREY),
        ("BACKGROUND", (0, 0), (-1, 0), VERY_LIGHT_GREY),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ROW_ALT]),
        ("TEXTCOLOR", (highlight_col, 1), (highlight_col, -1), SUCCESS),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for col in right_cols:
        style.append(("ALIGN", (col, 0), (col, -1), "RIGHT"))
    table.setStyle(TableStyle(style))
    return table


def render_summary_pdf(summary: MonthlySummary, generated_on: Optional[date] = None) -> bytes:
    """Report di riepilogo: card principali, tabella per categoria ed elenco completo fatture."""
    generated_on = generated_on or date.today()
    styles = _styles()
    month_label = summary.month.label
    elements: List = _header("Report mensile delle commissioni", month_label.upper(), styles)
    elements += [_summary_cards(summary), Spacer(1, 8 * mm)]

    elements.append(Paragraph("Dettaglio per categoria", styles["section"]))
    category_data = [["Categoria", "%", "Fatture", "Importo", "Commissione"]]
    rows = list(summary.category_rows)
    if summary.rest_row is not None:
        rows.append(summary.rest_row)
    for row in rows:
        category_data.append([
            row.name,
            format_percentage(row.percentage) or "-",
            str(row.invoice_count),
            _money(row.total_amount),
            _money_cents(row.total_commission),
        ])
    elements += [
        _plain_table(category_data, [60 * mm, 20 * mm, 22 * mm, 39 * mm, 39 * mm], [3, 4], 4),
        Spacer(1, 8 * mm),
    ]

    elements.append(Paragraph("Dettaglio fatture", styles["section"]))
    invoice_data = [["#", "NCF", "Data", "Fattura", "Commissione"]]
    for row in summary.invoice_rows:
        invoice_data.append([
            str(row.position),
            row.ncf,
            _numeric_date(row.date),
            _money(row.total_amount),
            _money_cents(row.total_commission),
        ])
    elements.append(
        _plain_table(invoice_data, [12 * mm, 63 * mm, 25 * mm, 40 * mm, 40 * mm], [3, 4], 4)
    )

    pdf = _build_document(
        elements, f"{month_label}  •  Generato: {_short_date(generated_on)}"
    )
    log_structured_event(
        "report_rendered",
        message="Report riepilogo generato",
        kind="summary",
        month=summary.month.key,
        size_bytes=len(pdf),
    )
    return pdf


def breakdown_filename(breakdown: MonthlyBreakdown) -> str:
    return f"desglose-{breakdown.month.key}.pdf"


def summary_filename(summary: MonthlySummary) -> str:
    return f"riepilogo-{summary.month.key}.pdf"
