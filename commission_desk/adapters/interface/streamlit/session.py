"""Per-browser session state of the Streamlit UI.

The active seller and the calculator form live in one ``AppSession`` object
stored in ``st.session_state``; nothing is kept in module globals.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from decimal import Decimal

from commission_desk.domain.models import Seller
from commission_desk.domain.services.validation import parse_amount_input

SESSION_KEY = "commission_desk_session"


@dataclass
class AppSession:
    """Mutable UI state for one browser session.

    Attributes:
        active_seller_id: Seller whose name appears on summaries and reports.
        total_text: Invoice total as typed in the calculator.
        product_texts: Typed amount per product id.
        form_version: Bumped on reset so input widgets get fresh keys.
        last_saved_ncf: NCF of the last invoice saved in this session.
    """

    active_seller_id: str | None = None
    total_text: str = ""
    product_texts: dict[str, str] = field(default_factory=dict)
    form_version: int = 0
    last_saved_ncf: str | None = None

    def total_amount(self) -> Decimal:
        return parse_amount_input(self.total_text)

    def product_amounts(self) -> dict[str, Decimal]:
        """Return the typed product amounts, digits only."""
        return {
            product_id: parse_amount_input(text)
            for product_id, text in self.product_texts.items()
        }

    def reset_form(self) -> None:
        """Clear the calculator inputs after a save or on request."""
        self.total_text = ""
        self.product_texts.clear()
        self.form_version += 1

    def widget_key(self, name: str) -> str:
        return f"{name}_{self.form_version}"

    def resolve_seller(self, sellers: list[Seller]) -> Seller | None:
        """Return the active seller, falling back to the default one.

        The stored id is refreshed when it no longer matches a seller.
        """
        by_id = {seller.id: seller for seller in sellers}
        if self.active_seller_id in by_id:
            return by_id[self.active_seller_id]
        fallback = next(
            (seller for seller in sellers if seller.is_default),
            sellers[0] if sellers else None,
        )
        self.active_seller_id = fallback.id if fallback else None
        return fallback


def get_session(state: MutableMapping) -> AppSession:
    """Return the session stored in ``state``, creating it on first use."""
    session = state.get(SESSION_KEY)
    if not isinstance(session, AppSession):
        session = AppSession()
        state[SESSION_KEY] = session
    return session


__all__ = ["SESSION_KEY", "AppSession", "get_session"]
