"""Tests for the Streamlit app entry point."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from commission_desk.adapters.interface.streamlit import app
from commission_desk.adapters.interface.streamlit.session import AppSession
from commission_desk.domain.errors import RepositoryError
from commission_desk.domain.models import Seller


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page
        self.captions: list[str] = []
        self.select_calls: list[str] = []

    def selectbox(self, label, options, index=0, format_func=None):
        self.select_calls.append(label)
        if label == "Página":
            return self.page
        return options[index]

    def caption(self, text: str) -> None:
        self.captions.append(text)

    def error(self, text: str) -> None:
        self.captions.append(text)


class _FakeStreamlit:
    def __init__(self, page: str = "Calculadora") -> None:
        self.session_state: dict = {}
        self.sidebar = _FakeSidebar(page)
        self.errors: list[str] = []
        self.config_kwargs = None
        self.title_text = None

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def error(self, text: str):
        self.errors.append(text)


def _services(sellers):
    return SimpleNamespace(
        sellers=SimpleNamespace(list_sellers=lambda: sellers),
    )


def test_main_renders_selected_page(monkeypatch):
    """main should resolve the seller and call the chosen page."""
    fake_st = _FakeStreamlit(page="Historial")
    services = _services(
        [
            Seller(id="s1", name="José"),
            Seller(id="s2", name="María", is_default=True),
        ]
    )
    rendered = []
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_services", lambda: services)
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)
    monkeypatch.setitem(
        app.PAGES,
        "Historial",
        lambda svc, session: rendered.append((svc, session)),
    )

    app.main()

    assert fake_st.config_kwargs["page_title"] == "Comisiones"
    [(received, session)] = rendered
    assert received is services
    assert isinstance(session, AppSession)
    assert session.active_seller_id == "s2"
    assert fake_st.sidebar.select_calls == ["Página", "Vendedor"]


def test_main_without_sellers_shows_hint(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_services", lambda: _services([]))
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)
    monkeypatch.setitem(app.PAGES, "Calculadora", lambda svc, session: None)

    app.main()

    assert "Sin vendedores" in fake_st.sidebar.captions[0]


def test_main_reports_database_errors(monkeypatch):
    """A failing database should stop rendering with an error message."""
    fake_st = _FakeStreamlit()

    def _fail():
        raise RepositoryError("open database failed")

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_services", _fail)

    app.main()

    assert "open database failed" in fake_st.errors[0]
    assert fake_st.session_state == {}
