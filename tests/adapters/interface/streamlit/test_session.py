"""Tests for the Streamlit session state."""

from decimal import Decimal

from commission_desk.adapters.interface.streamlit.session import (
    SESSION_KEY,
    AppSession,
    get_session,
)
from commission_desk.domain.models import Seller


def test_get_session_creates_once() -> None:
    state: dict = {}

    session = get_session(state)

    assert state[SESSION_KEY] is session
    assert get_session(state) is session


def test_typed_amounts_keep_digits_only() -> None:
    session = AppSession(total_text="1,250", product_texts={"p1": "$300"})

    assert session.total_amount() == Decimal("1250")
    assert session.product_amounts() == {"p1": Decimal("300")}


def test_reset_form_clears_inputs_and_changes_keys() -> None:
    session = AppSession(total_text="100", product_texts={"p1": "5"})
    key = session.widget_key("total")

    session.reset_form()

    assert session.total_text == ""
    assert session.product_texts == {}
    assert session.widget_key("total") != key


def test_resolve_seller_falls_back_to_default() -> None:
    sellers = [
        Seller(id="s1", name="José"),
        Seller(id="s2", name="María", is_default=True),
    ]
    session = AppSession(active_seller_id="gone")

    assert session.resolve_seller(sellers).id == "s2"
    assert session.active_seller_id == "s2"

    session.active_seller_id = "s1"
    assert session.resolve_seller(sellers).id == "s1"
    assert AppSession().resolve_seller([]) is None
