"""Breakdown page: sales per product for a month, and bulk rate changes."""

import streamlit as st

from commission_desk.adapters.interface.streamlit.services import (
    USER_ERRORS,
    AppServices,
)
from commission_desk.adapters.interface.streamlit.session import AppSession
from commission_desk.domain.errors import BulkUpdateError
from commission_desk.domain.models import ProductBreakdown
from commission_desk.utils.formatting import (
    format_currency,
    format_day_label,
    format_percent,
    month_label,
)


def section_rows(section: ProductBreakdown) -> list[dict[str, str]]:
    return [
        {
            "NCF": entry.ncf,
            "Fecha": format_day_label(entry.date),
            "Cliente": entry.client_name or "-",
            "Monto": f"${format_currency(entry.amount)}",
        }
        for entry in section.entries
    ]


def _render_section(section: ProductBreakdown) -> None:
    title = section.name
    if section.percentage is not None:
        title = f"{title} ({format_percent(section.percentage)})"
    with st.expander(
        f"{title}: ${format_currency(section.total_amount)} · "
        f"comisión ${format_currency(section.total_commission)}"
    ):
        st.dataframe(
            section_rows(section),
            use_container_width=True,
            hide_index=True,
        )


def _render_bulk_update(
    services: AppServices,
    year: int,
    month: int,
    product_names: list[str],
) -> None:
    st.subheader("Cambiar porcentaje del mes")
    if not product_names:
        st.caption("No hay productos especiales vendidos en este mes.")
        return
    with st.form("bulk_update"):
        product_name = st.selectbox("Producto", product_names)
        new_percentage = st.number_input(
            "Nuevo %",
            min_value=0.0,
            max_value=100.0,
            value=0.0,
            step=0.5,
        )
        submitted = st.form_submit_button("Aplicar a todas las facturas")
    if not submitted:
        return
    try:
        result = services.bulk_update.execute(
            year,
            month,
            product_name,
            str(new_percentage),
        )
    except BulkUpdateError as exc:
        st.error(
            f"{exc}. Se actualizaron {exc.updated_count} facturas antes del "
            "error."
        )
        return
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    st.toast(
        f"{result.updated_count} facturas actualizadas a "
        f"{format_percent(result.new_percentage)} para {result.product_name}"
    )
    st.rerun()


def _render_export(services: AppServices, year: int, month: int) -> None:
    if not st.button("Generar PDF del desglose"):
        return
    try:
        path = services.reports.breakdown(year, month)
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    st.download_button(
        "Descargar PDF",
        data=path.read_bytes(),
        file_name=path.name,
        mime="application/pdf",
    )


def render(services: AppServices, session: AppSession) -> None:
    """Render the monthly product breakdown page."""
    st.header("Desglose")
    try:
        months, _years = services.periods.execute()
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    labels = {month_label(year, month): (year, month) for year, month in months}
    year, month = labels[st.selectbox("Mes", list(labels))]

    try:
        breakdown = services.monthly_breakdown.execute(year, month)
    except USER_ERRORS as exc:
        st.error(str(exc))
        return

    st.metric(
        "Comisión total del mes",
        f"${format_currency(breakdown.grand_total_commission)}",
    )
    if not breakdown.products and not breakdown.rest.entries:
        st.info("No hay ventas registradas este mes.")
    for section in breakdown.products:
        _render_section(section)
    if breakdown.rest.entries:
        _render_section(breakdown.rest)

    _render_bulk_update(
        services,
        year,
        month,
        [section.name for section in breakdown.products],
    )
    _render_export(services, year, month)


__all__ = ["section_rows", "render"]
