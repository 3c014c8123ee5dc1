# unit_registry/services/chart_service.py
"""
Chart panel for the report screens, exported as a single PNG.

One chart per selected grouping dimension. Every slice/bar is labelled with
its count and its share of that chart's own total, which is not always the
size of the filtered set (release status vs. vehicle type, for instance).
"""

import textwrap
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib
matplotlib.use("Agg")
from matplotlib.backends.backend_agg import FigureCanvasAgg  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from unit_registry.constants import CHART_COLORS
from unit_registry.errors import RecordValidationError, ReportExportError
from unit_registry.schemas.stats import AssetStats, VehicleStats
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)

# dimension -> (title, kind)
VEHICLE_DIMENSIONS: Dict[str, Tuple[str, str]] = {
    "city": ("Veículos por Cidade", "pie"),
    "vehicle_type": ("Veículos por Tipo", "bar"),
    "release_status": ("Situação de Liberação", "pie"),
    "key": ("Status das Chaves", "pie"),
    "state": ("Veículos por Estado", "bar"),
}

ASSET_DIMENSIONS: Dict[str, Tuple[str, str]] = {
    "sector": ("Itens por Setor", "pie"),
    "conservation_state": ("Estado de Conservação", "pie"),
    "asset_class": ("Itens por Classe", "bar"),
}


@dataclass
class ChartSpec:
    title: str
    kind: str                # "pie" or "bar"
    labels: List[str]
    values: List[float]

    @property
    def total(self) -> float:
        return sum(self.values)


def datapoint_label(value: float, total: float) -> str:
    percentage = (value * 100 / total) if total else 0.0
    return f"{value:g}\n({percentage:.1f}%)"


def _chart(title: str, kind: str, counts: Dict[str, float]) -> ChartSpec:
    pairs = [(label, value) for label, value in counts.items() if value]
    return ChartSpec(title, kind, [p[0] for p in pairs], [p[1] for p in pairs])


def _selected(dimensions: Optional[Sequence[str]], available: Dict[str, Tuple[str, str]]) -> List[str]:
    selected = list(dimensions) if dimensions else list(available)
    unknown = [d for d in selected if d not in available]
    if unknown:
        raise RecordValidationError(f"Gráfico desconhecido: {', '.join(unknown)}")
    return selected


def vehicle_charts(stats: VehicleStats, dimensions: Optional[Sequence[str]] = None) -> List[ChartSpec]:
    data = {
        "city": {name: b.total for name, b in stats.by_city.items()},
        "vehicle_type": {name: b.total for name, b in stats.by_type.items()},
        "release_status": {"Liberados": stats.released, "Não Liberados": stats.not_released},
        "key": {"Com Chave": stats.by_key.yes, "Sem Chave": stats.by_key.no},
        "state": dict(stats.by_state),
    }
    return [_chart(*VEHICLE_DIMENSIONS[d], data[d]) for d in _selected(dimensions, VEHICLE_DIMENSIONS)]


def asset_charts(stats: AssetStats, dimensions: Optional[Sequence[str]] = None) -> List[ChartSpec]:
    data = {
        "sector": {name: b.count for name, b in stats.by_sector.items()},
        "conservation_state": dict(stats.by_conservation_state),
        "asset_class": dict(stats.by_class),
    }
    return [_chart(*ASSET_DIMENSIONS[d], data[d]) for d in _selected(dimensions, ASSET_DIMENSIONS)]


def _draw_pie(ax, chart: ChartSpec):
    palette = [CHART_COLORS[i % len(CHART_COLORS)] for i in range(len(chart.values))]
    wedges, _ = ax.pie(
        chart.values,
        colors=palette,
        labels=[datapoint_label(v, chart.total) for v in chart.values],
        labeldistance=0.65,
        startangle=90,
        counterclock=False,
        textprops={"color": "white", "fontsize": 8},
        wedgeprops={"linewidth": 1, "edgecolor": "white"},
    )
    ax.legend(wedges, chart.labels, loc="upper center", bbox_to_anchor=(0.5, 0.0),
              fontsize=7, ncol=2, frameon=False)
    ax.set_aspect("equal")


def _draw_bar(ax, chart: ChartSpec):
    positions = range(len(chart.values))
    palette = [CHART_COLORS[i % len(CHART_COLORS)] for i in positions]
    bars = ax.bar(positions, chart.values, color=palette)
    for bar, value in zip(bars, chart.values):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), datapoint_label(value, chart.total),
                ha="center", va="bottom", fontsize=7)
    ax.set_xticks(list(positions))
    ax.set_xticklabels([textwrap.fill(label, 18) for label in chart.labels], rotation=30, ha="right", fontsize=7)
    ax.margins(y=0.2)
    ax.spines[["top", "right"]].set_visible(False)


def render_charts_png(charts: Sequence[ChartSpec], dpi: int = 100) -> bytes:
    """Rasterize the whole chart panel (all charts, two per row) to PNG."""
    if not charts:
        raise RecordValidationError("Nenhum gráfico selecionado")
    try:
        columns = min(2, len(charts))
        rows = (len(charts) + columns - 1) // columns
        figure = Figure(figsize=(6 * columns, 5 * rows), dpi=dpi)
        FigureCanvasAgg(figure)
        for index, chart in enumerate(charts, start=1):
            ax = figure.add_subplot(rows, columns, index)
            ax.set_title(chart.title, fontsize=11)
            if not chart.values:
                ax.text(0.5, 0.5, "Sem dados", ha="center", va="center", fontsize=10)
                ax.axis("off")
            elif chart.kind == "pie":
                _draw_pie(ax, chart)
            else:
                _draw_bar(ax, chart)
        figure.tight_layout()
        buffer = BytesIO()
        figure.savefig(buffer, format="png")
    except Exception as e:
        logger.error(f"[CHARTS] PNG export failed: {e}", exc_info=True)
        raise ReportExportError("Erro ao exportar gráficos") from e

    logger.info(f"[CHARTS] Exported {len(charts)} chart(s), {buffer.tell()} bytes")
    return buffer.getvalue()
