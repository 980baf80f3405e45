"""Chart builders for the Streamlit UI.

Pure transformations from statistics models to Altair and Plotly charts; the
pages only decide where to draw them.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

import altair as alt

from commission_desk.domain.constants import (
    FALLBACK_PRODUCT_COLOR,
    PRODUCT_COLORS,
)
from commission_desk.domain.models import (
    AnnualStatistics,
    DayBucket,
    RevenueSource,
)
from commission_desk.utils.formatting import format_currency, month_name

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go

REST_COLOR = "#94a3b8"


def source_colors(
    sources: Sequence[RevenueSource],
    product_colors: dict[str, str] | None = None,
) -> list[str]:
    """Return one colour per revenue source.

    Products use their catalog colour when known and the palette otherwise;
    the rest category is always grey.
    """
    known = product_colors or {}
    colors = []
    palette_index = 0
    for source in sources:
        if source.kind == "rest":
            colors.append(REST_COLOR)
            continue
        color = known.get(source.name)
        if color is None:
            color = PRODUCT_COLORS[palette_index % len(PRODUCT_COLORS)]
            palette_index += 1
        colors.append(color or FALLBACK_PRODUCT_COLOR)
    return colors


def prepare_revenue_donut_data(
    sources: Sequence[RevenueSource],
) -> list[dict[str, str | float]]:
    """Return Altair-ready rows for the sources with a positive commission.

    Args:
        sources: Revenue sources ranked by commission.

    Returns:
        Rows with the commission value, its label and its share.
    """
    positive = [source for source in sources if source.commission > 0]
    total = sum((source.commission for source in positive), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for source in positive:
        share = source.commission / total * Decimal("100") if total else 0
        data.append(
            {
                "source": source.name,
                "commission": float(source.commission),
                "commission_label": f"${format_currency(source.commission)}",
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def build_revenue_donut(
    sources: Sequence[RevenueSource],
    product_colors: dict[str, str] | None = None,
    chart_size: int = 280,
) -> alt.Chart | None:
    """Build a donut chart of commission per revenue source."""
    data = prepare_revenue_donut_data(sources)
    if not data:
        return None
    positive = [source for source in sources if source.commission > 0]
    hover = alt.selection_point(
        name="hover",
        fields=["source"],
        on="pointerover",
        clear="pointerout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.35,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("commission:Q"),
        color=alt.Color(
            "source:N",
            scale=alt.Scale(
                domain=[row["source"] for row in data],
                range=source_colors(positive, product_colors),
            ),
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("commission:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("source:N", title="Fuente"),
            alt.Tooltip("commission_label:N", title="Comisión"),
            alt.Tooltip("share_label:N", title="Participación"),
        ],
    )
    return base.add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    )


def prepare_daily_bar_data(
    daily: Sequence[DayBucket],
) -> list[dict[str, str | float | int]]:
    return [
        {
            "day": bucket.day,
            "commission": float(bucket.commission),
            "sales": float(bucket.sales),
            "count": bucket.count,
            "commission_label": f"${format_currency(bucket.commission)}",
        }
        for bucket in daily
    ]


def build_daily_bar_chart(
    daily: Sequence[DayBucket],
    highlight_day: int | None = None,
) -> alt.Chart:
    """Build a bar chart of commission per day of the month."""
    data = prepare_daily_bar_data(daily)
    highlight = highlight_day if highlight_day is not None else -1
    return alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=3,
        cornerRadiusTopRight=3,
    ).encode(
        x=alt.X("day:O", title="Día"),
        y=alt.Y("commission:Q", title="Comisión"),
        color=alt.condition(
            alt.datum.day == highlight,
            alt.value(PRODUCT_COLORS[1]),
            alt.value(PRODUCT_COLORS[0]),
        ),
        tooltip=[
            alt.Tooltip("day:O", title="Día"),
            alt.Tooltip("commission_label:N", title="Comisión"),
            alt.Tooltip("count:Q", title="Facturas"),
        ],
    ).properties(height=260)


def build_annual_figure(statistics: AnnualStatistics) -> "go.Figure":
    """Build a Plotly bar chart of sales and commission per month.

    Args:
        statistics: Twelve month buckets of the year.

    Returns:
        Plotly figure ready to be displayed in Streamlit.
    """
    import plotly.graph_objects as go

    labels = [month_name(bucket.month)[:3].capitalize()
              for bucket in statistics.monthly]
    growth_text = [
        "" if bucket.growth is None else f"{bucket.growth:+.1f}%"
        for bucket in statistics.monthly
    ]
    fig = go.Figure(
        data=[
            go.Bar(
                name="Ventas",
                x=labels,
                y=[float(bucket.sales) for bucket in statistics.monthly],
                marker_color=PRODUCT_COLORS[2],
                opacity=0.45,
            ),
            go.Bar(
                name="Comisión",
                x=labels,
                y=[float(bucket.commission) for bucket in statistics.monthly],
                marker_color=PRODUCT_COLORS[0],
                text=growth_text,
                textposition="outside",
            ),
        ]
    )
    fig.update_layout(
        barmode="group",
        margin=dict(l=8, r=8, t=24, b=8),
        height=380,
        legend=dict(orientation="h", y=-0.15),
    )
    return fig


__all__ = [
    "REST_COLOR",
    "source_colors",
    "prepare_revenue_donut_data",
    "build_revenue_donut",
    "prepare_daily_bar_data",
    "build_daily_bar_chart",
    "build_annual_figure",
]
