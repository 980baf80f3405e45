"""Ensure every Streamlit page is reachable from the app navigation."""

from importlib import import_module

import pytest

PAGE_MODULES = {
    "Calculadora": "calculator_page",
    "Historial": "history_page",
    "Desglose": "breakdown_page",
    "Estadísticas": "statistics_page",
    "Configuración": "settings_page",
}


@pytest.mark.parametrize("module_name", sorted(PAGE_MODULES.values()))
def test_page_modules_export_render(module_name) -> None:
    module = import_module(
        f"commission_desk.adapters.interface.streamlit.{module_name}"
    )

    assert "render" in module.__all__
    assert callable(module.render)


def test_app_navigation_lists_every_page() -> None:
    app = import_module("commission_desk.adapters.interface.streamlit.app")

    assert list(app.PAGES) == list(PAGE_MODULES)
    for label, module_name in PAGE_MODULES.items():
        module = import_module(
            f"commission_desk.adapters.interface.streamlit.{module_name}"
        )
        assert app.PAGES[label] is module.render
