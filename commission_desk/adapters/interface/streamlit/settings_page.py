"""Configuration page: catalog, clients, sellers, settings and backups."""

from dataclasses import replace
from datetime import date

import streamlit as st

from commission_desk.adapters.interface.streamlit.services import (
    USER_ERRORS,
    AppServices,
)
from commission_desk.adapters.interface.streamlit.session import AppSession
from commission_desk.domain.constants import NCF_PREFIX
from commission_desk.domain.models import Client, Product, Seller
from commission_desk.infrastructure.backup_json import (
    backup_filename,
    dumps_backup,
    loads_backup,
)
from commission_desk.utils.formatting import format_percent

DELETE_ALL_CONFIRMATION = "ELIMINAR"


def _notify(message: str) -> None:
    st.toast(message)
    st.rerun()


def _render_product(services: AppServices, product: Product) -> None:
    with st.expander(f"{product.name} · {format_percent(product.percentage)}"):
        with st.form(f"product_{product.id}"):
            name = st.text_input("Nombre", value=product.name)
            percentage = st.number_input(
                "%",
                min_value=0.0,
                max_value=100.0,
                value=float(product.percentage),
                step=0.5,
            )
            color = st.color_picker("Color", value=product.color)
            save = st.form_submit_button("Guardar")
            delete = st.form_submit_button("Eliminar")
        try:
            if save:
                services.products.update(
                    product.id,
                    name=name,
                    percentage=str(percentage),
                    color=color,
                )
                _notify(f"Producto {name} actualizado")
            elif delete:
                services.products.delete(product.id)
                _notify(f"Producto {product.name} eliminado")
        except USER_ERRORS as exc:
            st.error(str(exc))


def _render_products(services: AppServices) -> None:
    st.caption(
        "Cambiar un porcentaje aquí no modifica las facturas guardadas; "
        "usa Desglose para corregir un mes."
    )
    for product in services.products.list_products():
        _render_product(services, product)
    with st.form("new_product", clear_on_submit=True):
        name = st.text_input("Nuevo producto")
        percentage = st.number_input(
            "%",
            min_value=0.0,
            max_value=100.0,
            value=0.0,
            step=0.5,
        )
        submitted = st.form_submit_button("Agregar")
    if submitted:
        try:
            product = services.products.add(name, str(percentage))
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _notify(f"Producto {product.name} agregado")


def _client_form(prefix: str, client: Client | None = None) -> dict:
    return {
        "name": st.text_input(
            "Nombre",
            value=client.name if client else "",
            key=f"{prefix}_name",
        ),
        "phone": st.text_input(
            "Teléfono",
            value=(client.phone or "") if client else "",
            key=f"{prefix}_phone",
        ),
        "email": st.text_input(
            "Email",
            value=(client.email or "") if client else "",
            key=f"{prefix}_email",
        ),
        "address": st.text_input(
            "Dirección",
            value=(client.address or "") if client else "",
            key=f"{prefix}_address",
        ),
        "notes": st.text_area(
            "Notas",
            value=(client.notes or "") if client else "",
            key=f"{prefix}_notes",
        ),
    }


def _render_clients(services: AppServices) -> None:
    clients = services.clients.list_clients()
    st.caption(f"{len(clients)} clientes")
    for client in clients:
        with st.expander(client.name):
            with st.form(f"client_{client.id}"):
                values = _client_form(f"client_{client.id}", client)
                save = st.form_submit_button("Guardar")
                delete = st.form_submit_button("Eliminar")
            try:
                if save:
                    services.clients.update(replace(client, **values))
                    _notify(f"Cliente {values['name']} actualizado")
                elif delete:
                    services.clients.delete(client.id)
                    _notify(f"Cliente {client.name} eliminado")
            except USER_ERRORS as exc:
                st.error(str(exc))

    with st.form("new_client", clear_on_submit=True):
        st.markdown("**Nuevo cliente**")
        values = _client_form("new_client")
        submitted = st.form_submit_button("Agregar")
    if submitted:
        try:
            client = services.clients.add(**values)
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _notify(f"Cliente {client.name} agregado")

    uploaded = st.file_uploader(
        "Importar clientes (CSV: nombre, teléfono, email)",
        type=["csv"],
    )
    if uploaded is not None and st.button("Importar CSV"):
        try:
            count = services.import_clients.execute(
                uploaded.getvalue().decode("utf-8-sig")
            )
        except UnicodeDecodeError:
            st.error("El archivo debe estar codificado en UTF-8.")
            return
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _notify(f"{count} clientes importados")


def _render_seller(
    services: AppServices,
    session: AppSession,
    seller: Seller,
) -> None:
    title = f"{seller.name} (predeterminado)" if seller.is_default else seller.name
    with st.expander(title):
        with st.form(f"seller_{seller.id}"):
            name = st.text_input("Nombre", value=seller.name)
            email = st.text_input("Email", value=seller.email or "")
            phone = st.text_input("Teléfono", value=seller.phone or "")
            save = st.form_submit_button("Guardar")
            make_default = st.form_submit_button(
                "Predeterminado",
                disabled=seller.is_default,
            )
            delete = st.form_submit_button(
                "Eliminar",
                disabled=seller.is_default,
            )
        try:
            if save:
                services.sellers.update(
                    replace(seller, name=name, email=email, phone=phone)
                )
                _notify(f"Vendedor {name} actualizado")
            elif make_default:
                services.sellers.set_default(seller.id)
                session.active_seller_id = seller.id
                _notify(f"{seller.name} es el vendedor predeterminado")
            elif delete:
                services.sellers.delete(seller.id)
                _notify(f"Vendedor {seller.name} eliminado")
        except USER_ERRORS as exc:
            st.error(str(exc))


def _render_sellers(services: AppServices, session: AppSession) -> None:
    for seller in services.sellers.list_sellers():
        _render_seller(services, session, seller)
    with st.form("new_seller", clear_on_submit=True):
        name = st.text_input("Nuevo vendedor")
        email = st.text_input("Email")
        phone = st.text_input("Teléfono")
        submitted = st.form_submit_button("Agregar")
    if submitted:
        try:
            seller = services.sellers.add(name, email=email, phone=phone)
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _notify(f"Vendedor {seller.name} agregado")


def _render_general(services: AppServices) -> None:
    with st.form("general_settings"):
        rest = st.number_input(
            "% resto de productos",
            min_value=0.0,
            max_value=100.0,
            value=float(services.settings.get_rest_percentage()),
            step=0.5,
        )
        last_ncf = services.settings.get_last_ncf_number()
        last_number = st.number_input(
            f"Último NCF usado ({NCF_PREFIX}____)",
            min_value=0,
            max_value=9999,
            value=last_ncf or 0,
            step=1,
        )
        submitted = st.form_submit_button("Guardar")
    suggested = services.settings.suggest_next_ncf()
    if suggested:
        st.caption(f"Siguiente NCF sugerido: {suggested}")
    if not submitted:
        return
    try:
        services.settings.update_rest_percentage(str(rest))
        if last_ncf is not None or last_number:
            services.settings.update_last_ncf_number(int(last_number))
    except USER_ERRORS as exc:
        st.error(str(exc))
        return
    _notify("Configuración guardada")


def _render_backup(services: AppServices) -> None:
    st.subheader("Copia de seguridad")
    if st.button("Preparar copia"):
        try:
            payload = services.export_backup.execute()
        except USER_ERRORS as exc:
            st.error(str(exc))
        else:
            st.download_button(
                "Descargar JSON",
                data=dumps_backup(payload),
                file_name=backup_filename(date.today()),
                mime="application/json",
            )

    uploaded = st.file_uploader("Restaurar copia", type=["json"])
    if uploaded is not None and st.button("Restaurar"):
        try:
            result = services.import_backup.execute(
                loads_backup(uploaded.getvalue())
            )
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        summary = ", ".join(
            f"{table}: {count}" for table, count in result.written.items()
        )
        if result.duplicate_ncfs:
            summary += f", NCF repetidos omitidos: {result.duplicate_ncfs}"
        _notify(f"Copia restaurada ({summary})")

    st.subheader("Eliminar datos")
    st.caption("Elimina todas las facturas y clientes. No se puede deshacer.")
    confirmation = st.text_input(
        f"Escribe {DELETE_ALL_CONFIRMATION} para confirmar",
    )
    if st.button(
        "Eliminar todo",
        disabled=confirmation != DELETE_ALL_CONFIRMATION,
    ):
        try:
            services.delete_all.execute()
        except USER_ERRORS as exc:
            st.error(str(exc))
            return
        _notify("Datos eliminados")


def render(services: AppServices, session: AppSession) -> None:
    """Render the configuration page."""
    st.header("Configuración")
    products_tab, clients_tab, sellers_tab, general_tab, data_tab = st.tabs(
        ["Productos", "Clientes", "Vendedores", "General", "Datos"]
    )
    try:
        with products_tab:
            _render_products(services)
        with clients_tab:
            _render_clients(services)
        with sellers_tab:
            _render_sellers(services, session)
        with general_tab:
            _render_general(services)
        with data_tab:
            _render_backup(services)
    except USER_ERRORS as exc:
        st.error(str(exc))


__all__ = ["DELETE_ALL_CONFIRMATION", "render"]
