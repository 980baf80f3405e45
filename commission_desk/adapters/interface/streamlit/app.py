"""Streamlit commission desk entry point."""

import streamlit as st

from commission_desk.adapters.interface.streamlit import (
    breakdown_page,
    calculator_page,
    history_page,
    settings_page,
    statistics_page,
)
from commission_desk.adapters.interface.streamlit.services import (
    USER_ERRORS,
    AppServices,
    build_services,
)
from commission_desk.adapters.interface.streamlit.session import (
    AppSession,
    get_session,
)
from commission_desk.infrastructure.logging.logger import get_usage_logger

PAGES = {
    "Calculadora": calculator_page.render,
    "Historial": history_page.render,
    "Desglose": breakdown_page.render,
    "Estadísticas": statistics_page.render,
    "Configuración": settings_page.render,
}


@st.cache_resource(show_spinner=False)
def _load_services() -> AppServices:
    """Wire the use cases once per server process."""
    return build_services()


def _render_seller_selector(services: AppServices, session: AppSession) -> None:
    """Let the user pick the seller shown on summaries."""
    sellers = services.sellers.list_sellers()
    if not sellers:
        st.sidebar.caption("Sin vendedores. Agrega uno en Configuración.")
        session.active_seller_id = None
        return
    active = session.resolve_seller(sellers)
    ids = [seller.id for seller in sellers]
    names = {seller.id: seller.name for seller in sellers}
    session.active_seller_id = st.sidebar.selectbox(
        "Vendedor",
        ids,
        index=ids.index(active.id) if active else 0,
        format_func=lambda seller_id: names[seller_id],
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Comisiones", layout="wide")
    st.title("Comisiones")

    try:
        services = _load_services()
    except USER_ERRORS as exc:
        st.error(f"No se pudo abrir la base de datos: {exc}")
        return
    session = get_session(st.session_state)

    page = st.sidebar.selectbox("Página", list(PAGES))
    get_usage_logger().info(f"Page viewed: {page}")
    try:
        _render_seller_selector(services, session)
    except USER_ERRORS as exc:
        st.sidebar.error(str(exc))
    PAGES[page](services, session)


if __name__ == "__main__":  # pragma: no cover
    main()
