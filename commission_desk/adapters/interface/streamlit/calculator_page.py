"""Calculator page: type an invoice, see its commission, save it."""

from datetime import date

import streamlit as st

from commission_desk.adapters.interface.streamlit.services import (
    USER_ERRORS,
    AppServices,
)
from commission_desk.adapters.interface.streamlit.session import AppSession
from commission_desk.domain.constants import NCF_PREFIX, REST_LABEL
from commission_desk.domain.models import Client, CommissionBreakdown
from commission_desk.domain.services.ncf import format_ncf
from commission_desk.utils.formatting import format_currency, format_percent

NO_CLIENT_LABEL = "Sin cliente"


def breakdown_rows(breakdown: CommissionBreakdown) -> list[dict[str, str]]:
    """Return table rows for the product lines followed by the rest."""
    rows = [
        {
            "Producto": line.name,
            "Monto": f"${format_currency(line.amount)}",
            "%": format_percent(line.percentage),
            "Comisión": f"${format_currency(line.commission)}",
        }
        for line in breakdown.lines
        if line.amount > 0
    ]
    rows.append(
        {
            "Producto": REST_LABEL,
            "Monto": f"${format_currency(breakdown.rest_amount)}",
            "%": format_percent(breakdown.rest_percentage),
            "Comisión": f"${format_currency(breakdown.rest_commission)}",
        }
    )
    return rows


def client_options(clients: list[Client]) -> dict[str, str | None]:
    """Map select box labels to client ids, with a "no client" entry first."""
    options: dict[str, str | None] = {NO_CLIENT_LABEL: None}
    for client in clients:
        label = client.name
        if label in options:
            label = f"{client.name} ({client.id[:6]})"
        options[label] = client.id
    return options


def _render_inputs(services: AppServices, session: AppSession) -> None:
    session.total_text = st.text_input(
        "Total de la factura",
        value=session.total_text,
        key=session.widget_key("total"),
        placeholder="0",
    )
    products = services.products.list_products()
    if not products:
        st.info("Agrega productos en Configuración para calcular comisiones.")
        return
    columns = st.columns(2)
    for index, product in enumerate(products):
        column = columns[index % 2]
        session.product_texts[product.id] = column.text_input(
            f"{product.name} ({format_percent(product.percentage)})",
            value=session.product_texts.get(product.id, ""),
            key=session.widget_key(f"product_{product.id}"),
            placeholder="0",
        )


def _render_breakdown(breakdown: CommissionBreakdown) -> None:
    total_col, special_col, rest_col = st.columns(3)
    total_col.metric(
        "Comisión total",
        f"${format_currency(breakdown.total_commission)}",
    )
    special_col.metric(
        "Productos especiales",
        f"${format_currency(breakdown.special_total)}",
    )
    rest_col.metric(REST_LABEL, f"${format_currency(breakdown.rest_amount)}")
    st.dataframe(
        breakdown_rows(breakdown),
        use_container_width=True,
        hide_index=True,
    )


def _render_save_form(services: AppServices, session: AppSession) -> None:
    st.subheader("Guardar factura")
    suggested = services.settings.next_ncf_number()
    suffix_default = f"{suggested:04d}" if suggested is not None else ""
    options = client_options(services.clients.list_clients())
    with st.form(session.widget_key("save_invoice")):
        suffix = st.text_input(
            f"NCF ({NCF_PREFIX}____)",
            value=suffix_default,
            max_chars=4,
        )
        invoice_date = st.date_input("Fecha", value=date.today())
        client_label = st.selectbox("Cliente", list(options))
        submitted = st.form_submit_button("Guardar")
    if not submitted:
        return
    try:
        invoice = services.save_invoice.execute(
            ncf=format_ncf(suffix),
            invoice_date=invoice_date,
            total_invoice=session.total_amount(),
            product_amounts=session.product_amounts(),
            client_id=options[client_label],
            seller_id=session.active_seller_id,
        )
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    session.last_saved_ncf = invoice.ncf
    session.reset_form()
    st.toast(
        f"Factura {invoice.ncf} guardada: "
        f"${format_currency(invoice.total_commission)} de comisión"
    )
    st.rerun()


def render(services: AppServices, session: AppSession) -> None:
    """Render the calculator page."""
    st.header("Calculadora")
    if session.last_saved_ncf:
        st.caption(f"Última factura guardada: {session.last_saved_ncf}")
    _render_inputs(services, session)
    try:
        breakdown = services.calculate.execute(
            session.total_amount(),
            session.product_amounts(),
        )
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    _render_breakdown(breakdown)
    if session.total_amount() <= 0:
        return
    _render_save_form(services, session)
    if st.button("Limpiar"):
        session.reset_form()
        st.rerun()


__all__ = ["NO_CLIENT_LABEL", "breakdown_rows", "client_options", "render"]
