"""History page: list, edit and delete saved invoices."""

import streamlit as st

from commission_desk.adapters.interface.streamlit.calculator_page import (
    client_options,
)
from commission_desk.adapters.interface.streamlit.services import (
    USER_ERRORS,
    AppServices,
)
from commission_desk.adapters.interface.streamlit.session import AppSession
from commission_desk.domain.models import Invoice
from commission_desk.utils.formatting import (
    format_currency,
    format_day_label,
    month_label,
)

ALL_MONTHS_LABEL = "Todos"


def invoice_rows(
    invoices: list[Invoice],
    client_names: dict[str, str],
) -> list[dict[str, str]]:
    """Return one table row per invoice."""
    return [
        {
            "Fecha": (
                format_day_label(invoice.invoice_date)
                if invoice.invoice_date
                else "-"
            ),
            "NCF": invoice.ncf,
            "Cliente": client_names.get(invoice.client_id or "", "-"),
            "Total": f"${format_currency(invoice.total_amount)}",
            "Comisión": f"${format_currency(invoice.total_commission)}",
        }
        for invoice in invoices
    ]


def _period_options(services: AppServices) -> dict[str, tuple[int, int] | None]:
    months, _years = services.periods.execute()
    options: dict[str, tuple[int, int] | None] = {ALL_MONTHS_LABEL: None}
    for year, month in months:
        options[month_label(year, month)] = (year, month)
    return options


def _render_edit_form(
    services: AppServices,
    session: AppSession,
    invoice: Invoice,
) -> None:
    options = client_options(services.clients.list_clients())
    labels = list(options)
    current_label = next(
        (label for label, value in options.items() if value == invoice.client_id),
        labels[0],
    )
    with st.form(f"edit_{invoice.id}"):
        ncf = st.text_input("NCF", value=invoice.ncf)
        invoice_date = st.date_input("Fecha", value=invoice.invoice_date)
        total = st.number_input(
            "Total",
            min_value=0.0,
            value=float(invoice.total_amount),
            step=100.0,
        )
        lines = []
        for line in invoice.products:
            amount_col, pct_col = st.columns(2)
            amount = amount_col.number_input(
                f"{line.name}: monto",
                min_value=0.0,
                value=float(line.amount),
                step=100.0,
                key=f"edit_{invoice.id}_{line.name}_amount",
            )
            percentage = pct_col.number_input(
                f"{line.name}: %",
                min_value=0.0,
                max_value=100.0,
                value=float(line.percentage),
                step=0.5,
                key=f"edit_{invoice.id}_{line.name}_pct",
            )
            lines.append((line.name, str(amount), str(percentage)))
        rest_percentage = st.number_input(
            "% resto",
            min_value=0.0,
            max_value=100.0,
            value=float(invoice.rest_percentage),
            step=0.5,
        )
        client_label = st.selectbox(
            "Cliente",
            labels,
            index=labels.index(current_label),
        )
        submitted = st.form_submit_button("Guardar cambios")
    if not submitted:
        return
    try:
        updated = services.update_invoice.execute(
            invoice_id=invoice.id,
            ncf=ncf,
            invoice_date=invoice_date,
            total_amount=str(total),
            lines=lines,
            rest_percentage=str(rest_percentage),
            client_id=options[client_label],
            seller_id=invoice.seller_id or session.active_seller_id,
        )
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    st.toast(f"Factura {updated.ncf} actualizada")
    st.rerun()


def _render_delete(services: AppServices, invoice: Invoice) -> None:
    confirm = st.checkbox(
        f"Confirmo que quiero eliminar la factura {invoice.ncf}",
        key=f"confirm_delete_{invoice.id}",
    )
    if st.button("Eliminar", disabled=not confirm, key=f"delete_{invoice.id}"):
        try:
            services.delete_invoice.execute(invoice.id)
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        st.toast(f"Factura {invoice.ncf} eliminada")
        st.rerun()


def render(services: AppServices, session: AppSession) -> None:
    """Render the invoice history page."""
    st.header("Historial")
    try:
        options = _period_options(services)
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    period_col, search_col = st.columns(2)
    period_label = period_col.selectbox("Mes", list(options))
    search = search_col.text_input("Buscar NCF", placeholder="B0100000...")
    period = options[period_label]
    try:
        invoices = services.list_invoices.execute(
            year=period[0] if period else None,
            month=period[1] if period else None,
            search=search or None,
        )
        client_names = {
            client.id: client.name
            for client in services.clients.list_clients()
        }
    except USER_ERRORS as exc:
        st.error(str(exc))
        return

    st.caption(f"{len(invoices)} facturas")
    if not invoices:
        st.warning("No hay facturas para este período.")
        return
    st.dataframe(
        invoice_rows(invoices, client_names),
        use_container_width=True,
        hide_index=True,
    )

    by_label = {
        f"{invoice.ncf} · ${format_currency(invoice.total_amount)}": invoice
        for invoice in invoices
    }
    selected = st.selectbox("Factura", list(by_label))
    invoice = by_label[selected]
    with st.expander("Editar"):
        _render_edit_form(services, session, invoice)
    with st.expander("Eliminar"):
        _render_delete(services, invoice)


__all__ = ["ALL_MONTHS_LABEL", "invoice_rows", "render"]
