"""Statistics page: monthly dashboard and annual summary."""

from datetime import date

import streamlit as st

from commission_desk.adapters.interface.streamlit.charts import (
    build_annual_figure,
    build_daily_bar_chart,
    build_revenue_donut,
)
from commission_desk.adapters.interface.streamlit.services import (
    USER_ERRORS,
    AppServices,
)
from commission_desk.adapters.interface.streamlit.session import AppSession
from commission_desk.domain.models import (
    AnnualStatistics,
    MonthlyStatistics,
    PeriodChange,
)
from commission_desk.utils.formatting import (
    format_currency,
    format_day_label,
    format_percent,
    month_label,
    month_name,
)

MONTHLY_VIEW = "Mensual"
ANNUAL_VIEW = "Anual"


def format_change(change: PeriodChange) -> str:
    """Return a signed percentage for ``st.metric`` deltas."""
    sign = "+" if change.is_positive else "-"
    return f"{sign}{format_percent(change.percent)}"


def _download(path) -> None:
    st.download_button(
        "Descargar PDF",
        data=path.read_bytes(),
        file_name=path.name,
        mime="application/pdf",
    )


def _render_monthly(
    services: AppServices,
    statistics: MonthlyStatistics,
) -> None:
    commission_col, sales_col, count_col, average_col = st.columns(4)
    commission_col.metric(
        "Comisión",
        f"${format_currency(statistics.total_commission)}",
        format_change(statistics.commission_change),
    )
    sales_col.metric(
        "Ventas",
        f"${format_currency(statistics.total_sales)}",
        format_change(statistics.sales_change),
    )
    count_col.metric(
        "Facturas",
        str(statistics.invoice_count),
        format_change(statistics.invoice_change),
    )
    average_col.metric(
        "Comisión promedio",
        f"${format_currency(statistics.average_commission)}",
    )
    st.info(statistics.narrative)

    product_colors = {
        product.name: product.color
        for product in services.products.list_products()
    }
    donut_col, daily_col = st.columns(2)
    with donut_col:
        st.subheader("Fuentes de comisión")
        donut = build_revenue_donut(statistics.revenue_sources, product_colors)
        if donut is None:
            st.caption("Sin comisiones este mes.")
        else:
            st.altair_chart(donut, use_container_width=True)
    with daily_col:
        st.subheader("Actividad diaria")
        best_day = statistics.best_day
        st.altair_chart(
            build_daily_bar_chart(
                statistics.daily,
                highlight_day=best_day.day if best_day else None,
            ),
            use_container_width=True,
        )
        if best_day is not None:
            st.caption(
                f"Mejor día: {format_day_label(best_day.date)} con "
                f"${format_currency(best_day.commission)} en comisiones"
            )

    clients_col, record_col = st.columns(2)
    with clients_col:
        st.subheader("Mejores clientes")
        if statistics.client_ranking:
            st.dataframe(
                [
                    {
                        "Cliente": client.name,
                        "Compras": f"${format_currency(client.amount)}",
                        "Facturas": client.count,
                    }
                    for client in statistics.client_ranking[:5]
                ],
                use_container_width=True,
                hide_index=True,
            )
        else:
            st.caption("Sin clientes asignados este mes.")
    with record_col:
        st.subheader("Factura récord")
        record = statistics.record_invoice
        if record is None:
            st.caption("Sin facturas este mes.")
        else:
            st.metric(
                record.ncf,
                f"${format_currency(record.total_amount)}",
                f"${format_currency(record.total_commission)} de comisión",
                delta_color="off",
            )

    if st.button("Generar PDF del mes"):
        try:
            path = services.reports.monthly(statistics.year, statistics.month)
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _download(path)


def _render_annual(services: AppServices, statistics: AnnualStatistics) -> None:
    commission_col, sales_col, count_col = st.columns(3)
    commission_col.metric(
        "Comisión anual",
        f"${format_currency(statistics.total_commission)}",
    )
    sales_col.metric("Ventas", f"${format_currency(statistics.total_sales)}")
    count_col.metric("Facturas", str(statistics.invoice_count))
    st.plotly_chart(build_annual_figure(statistics), use_container_width=True)
    best = statistics.best_month
    if best is not None:
        st.success(
            f"Mejor mes: {month_name(best.month).capitalize()} con "
            f"${format_currency(best.commission)} en comisiones"
        )
    if st.button("Generar PDF anual"):
        try:
            path = services.reports.annual(statistics.year)
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _download(path)


def render(services: AppServices, session: AppSession) -> None:
    """Render the statistics page."""
    st.header("Estadísticas")
    try:
        months, years = services.periods.execute()
        sellers = services.sellers.list_sellers()
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    seller = session.resolve_seller(sellers)
    view = st.radio(
        "Vista",
        [MONTHLY_VIEW, ANNUAL_VIEW],
        horizontal=True,
    )
    try:
        if view == MONTHLY_VIEW:
            labels = {
                month_label(year, month): (year, month)
                for year, month in months
            }
            year, month = labels[st.selectbox("Mes", list(labels))]
            statistics = services.monthly_statistics.execute(
                year,
                month,
                seller_first_name=seller.first_name if seller else "ti",
            )
            _render_monthly(services, statistics)
        else:
            current = date.today().year
            year = st.selectbox(
                "Año",
                years,
                index=years.index(current) if current in years else 0,
            )
            _render_annual(services, services.annual_statistics.execute(year))
    except USER_ERRORS as exc:
        st.error(str(exc))


__all__ = ["MONTHLY_VIEW", "ANNUAL_VIEW", "format_change", "render"]
