# unit_registry/services/report_service.py
"""
Paginated PDF reports for vehicles and assets.

A report is built in two steps: a module-specific builder turns the filtered
records and their statistics into a ReportDocument, then render_pdf lays it
out on A4 pages with reportlab.

Layout: title, active filters, one section per grouping dimension, then the
itemized table. Prose is written with a manual vertical cursor. Each line
checks the space left on the page; each group (header + its lines) is
reserved as one block so a header never ends up alone at the bottom of a
page. The table is a platypus Table that is split across pages on its own
and repeats its header row.
"""

from dataclasses import dataclass, field
from datetime import date
from io import BytesIO
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from unit_registry.errors import ReportExportError
from unit_registry.schemas.stats import AssetStats, VehicleStats
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)

MARGIN = 14 * mm
LINE_HEIGHT = 7 * mm
INDENT = 6 * mm
GROUP_GAP = 2 * mm

VEHICLE_HEADER_COLOR = colors.Color(66 / 255, 66 / 255, 166 / 255)
ASSET_HEADER_COLOR = colors.Color(79 / 255, 70 / 255, 229 / 255)

CELL_STYLE = ParagraphStyle("cell", fontName="Helvetica", fontSize=8, leading=10)


# ── Formatting ────────────────────────────────────────────────────────────

def format_date(value: Optional[date], empty: str = "") -> str:
    return value.strftime("%d/%m/%Y") if value else empty


def format_currency(value: float) -> str:
    """Brazilian real: R$ 1.234,56"""
    text = f"{value or 0:,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def period_line(start: Optional[date], end: Optional[date]) -> str:
    return f"Período: {format_date(start, 'Início')} até {format_date(end, 'Fim')}"


# ── Document model ────────────────────────────────────────────────────────

@dataclass
class ReportGroup:
    header: str
    lines: List[str] = field(default_factory=list)


@dataclass
class ReportSection:
    title: str
    lines: List[str] = field(default_factory=list)
    groups: List[ReportGroup] = field(default_factory=list)


@dataclass
class ReportTable:
    title: str
    columns: List[str]
    rows: List[List[str]]
    col_widths: List[float]
    header_color: colors.Color


@dataclass
class ReportDocument:
    title: str
    filter_lines: List[str]
    sections: List[ReportSection]
    table: ReportTable
    filename: str


# ── Builders ──────────────────────────────────────────────────────────────

def _release_line(bucket) -> str:
    return f"Total: {bucket.total} | Liberados: {bucket.released} | Não Liberados: {bucket.not_released}"


def build_vehicle_report(vehicles: Sequence, stats: VehicleStats, city: Optional[str] = None,
                         start: Optional[date] = None, end: Optional[date] = None) -> ReportDocument:
    sections = [
        ReportSection("Resumo Geral:", lines=[
            f"Total de Veículos: {stats.total}",
            f"Veículos Liberados: {stats.released}",
            f"Veículos Não Liberados: {stats.not_released}",
        ]),
        ReportSection("Por Cidade:", groups=[
            ReportGroup(f"{name}:", [_release_line(bucket)])
            for name, bucket in stats.by_city.items() if bucket.total
        ]),
        ReportSection("Por Tipo de Veículo:", groups=[
            ReportGroup(f"{name}:", [_release_line(bucket)])
            for name, bucket in stats.by_type.items() if bucket.total
        ]),
        ReportSection("Status das Chaves:", lines=[
            f"Com Chave: {stats.by_key.yes}",
            f"Sem Chave: {stats.by_key.no}",
        ]),
        ReportSection("Por Estado:", lines=[
            f"{state}: {count}" for state, count in stats.by_state.items() if count
        ]),
    ]
    rows = [
        [
            f"{v.plate} ({v.state})",
            f"{v.brand} {v.model}",
            v.vehicle_type,
            v.city,
            format_date(v.inspection_date),
            format_date(v.release_date, "Não liberado"),
        ]
        for v in vehicles
    ]
    table = ReportTable(
        title="Lista Detalhada de Veículos:",
        columns=["Placa", "Marca/Modelo", "Tipo", "Cidade", "Data Vistoria", "Data Liberação"],
        rows=rows,
        col_widths=[w * mm for w in (32, 40, 26, 26, 28, 30)],
        header_color=VEHICLE_HEADER_COLOR,
    )
    return ReportDocument(
        title="Relatório de Veículos",
        filter_lines=[period_line(start, end), f"Cidade: {city or 'Todas'}"],
        sections=sections,
        table=table,
        filename="relatorio-detalhado-veiculos.pdf",
    )


def build_asset_report(assets: Sequence, stats: AssetStats, sector: Optional[str] = None,
                       start: Optional[date] = None, end: Optional[date] = None) -> ReportDocument:
    sections = [
        ReportSection("Resumo Geral:", lines=[
            f"Total de Itens: {stats.total}",
            f"Valor Total: {format_currency(stats.total_value)}",
        ]),
        ReportSection("Por Setor:", groups=[
            ReportGroup(f"{name}:", [f"Itens: {bucket.count} | Valor: {format_currency(bucket.value)}"])
            for name, bucket in stats.by_sector.items() if bucket.count
        ]),
        ReportSection("Por Estado de Conservação:", lines=[
            f"{state}: {count}" for state, count in stats.by_conservation_state.items() if count
        ]),
        ReportSection("Por Classe:", lines=[
            f"{name}: {count}" for name, count in stats.by_class.items() if count
        ]),
    ]
    rows = [
        [
            f"G: {a.general_tag}\nL: {a.local_tag}",
            f"{a.description}\n{a.asset_class}",
            a.sector,
            a.conservation_state,
            format_currency(a.net_value),
        ]
        for a in assets
    ]
    table = ReportTable(
        title="Lista Detalhada:",
        columns=["Plaquetas", "Descrição", "Setor", "Estado", "Valor"],
        rows=rows,
        col_widths=[w * mm for w in (30, 62, 32, 26, 32)],
        header_color=ASSET_HEADER_COLOR,
    )
    return ReportDocument(
        title="Relatório de Patrimônio",
        filter_lines=[f"Setor: {sector or 'Todos'}", period_line(start, end)],
        sections=sections,
        table=table,
        filename="relatorio-patrimonio.pdf",
    )


# ── Renderer ──────────────────────────────────────────────────────────────

class PdfWriter:
    """Canvas plus a vertical cursor measured from the top of the page."""

    def __init__(self, buffer, title: str):
        self.canvas = canvas.Canvas(buffer, pagesize=A4)
        self.canvas.setTitle(title)
        self.width, self.height = A4
        self.y = MARGIN
        self.pages = 1
        self._font = ("Helvetica", 12)
        self.canvas.setFont(*self._font)

    @property
    def usable_height(self) -> float:
        return self.height - 2 * MARGIN

    @property
    def usable_width(self) -> float:
        return self.width - 2 * MARGIN

    def set_font(self, size: int, bold: bool = False):
        self._font = ("Helvetica-Bold" if bold else "Helvetica", size)
        self.canvas.setFont(*self._font)

    def new_page(self):
        self.canvas.showPage()
        self.canvas.setFont(*self._font)
        self.pages += 1
        self.y = MARGIN

    def ensure_space(self, required: float) -> bool:
        """Start a new page if `required` does not fit below the cursor."""
        if self.y + required > self.height - MARGIN:
            self.new_page()
            return True
        return False

    def reserve(self, block: float):
        # a block taller than a page can only be started at the top of one
        self.ensure_space(min(block, self.usable_height))

    def write_line(self, text: str, indent: float = 0):
        self.ensure_space(LINE_HEIGHT)
        baseline = self.height - (self.y + LINE_HEIGHT - 2 * mm)
        self.canvas.drawString(MARGIN + indent, baseline, text)
        self.y += LINE_HEIGHT

    def skip(self, amount: float = LINE_HEIGHT):
        self.y += amount

    def write_section(self, section: ReportSection):
        first_block = LINE_HEIGHT
        if section.groups:
            first_block += _group_height(section.groups[0])
        elif section.lines:
            first_block += LINE_HEIGHT
        self.reserve(first_block)
        self.write_line(section.title)
        for line in section.lines:
            self.write_line(line, INDENT)
        for group in section.groups:
            self.reserve(_group_height(group))
            self.write_line(group.header, INDENT)
            for line in group.lines:
                self.write_line(line, 2 * INDENT)
            self.skip(GROUP_GAP)
        self.skip()

    def write_table(self, table: ReportTable):
        self.reserve(LINE_HEIGHT * 3)
        self.write_line(table.title)
        self.skip(GROUP_GAP)

        data = [table.columns] + [
            [Paragraph(escape(cell).replace("\n", "<br/>"), CELL_STYLE) for cell in row]
            for row in table.rows
        ]
        flowable = Table(data, colWidths=table.col_widths, repeatRows=1)
        flowable.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), table.header_color),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ]))

        pending = [flowable]
        while pending:
            part = pending.pop(0)
            available = self.height - MARGIN - self.y
            _, height = part.wrapOn(self.canvas, self.usable_width, available)
            if height <= available:
                part.drawOn(self.canvas, MARGIN, self.height - self.y - height)
                self.y += height
                continue
            pieces = part.splitOn(self.canvas, self.usable_width, available)
            if len(pieces) > 1:
                pending = pieces + pending
                continue
            if self.y == MARGIN:
                raise ReportExportError("Linha da tabela maior que a página")
            self.new_page()
            pending.insert(0, part)

    def finish(self):
        self.canvas.save()


def _group_height(group: ReportGroup) -> float:
    return LINE_HEIGHT * (1 + len(group.lines)) + GROUP_GAP


def render_pdf(document: ReportDocument) -> bytes:
    """Lay out a ReportDocument; any rendering failure becomes ReportExportError."""
    buffer = BytesIO()
    try:
        writer = PdfWriter(buffer, document.title)
        writer.set_font(16, bold=True)
        writer.write_line(document.title)
        writer.set_font(12)
        for line in document.filter_lines:
            writer.write_line(line)
        writer.skip()
        for section in document.sections:
            writer.write_section(section)
        writer.set_font(10)
        writer.write_table(document.table)
        writer.finish()
    except ReportExportError:
        logger.error(f"[REPORT] {document.filename}: row does not fit on a page")
        raise
    except Exception as e:
        logger.error(f"[REPORT] Failed to render {document.filename}: {e}", exc_info=True)
        raise ReportExportError("Erro ao gerar relatório PDF") from e

    logger.info(f"[REPORT] {document.filename}: {len(document.table.rows)} rows, {writer.pages} page(s)")
    return buffer.getvalue()
