"""
Payment Links Module

Deep links that open a payment app with the settlement amount filled in.

Supported apps:
    - Venmo: venmo://paycharge?txn=pay&recipients=<handle>&amount=<0.00>&note=<note>
    - Cash App: https://cash.app/$<handle>/<0.00> (no note support)
    - Zelle: no universal deep link; the handle has to be used manually
"""

import logging
from enum import Enum
from typing import Optional
from urllib.parse import quote

from group_trip_settlement.config import get_settings
from group_trip_settlement.models import Member, PaymentProfile, Settlement
from group_trip_settlement.money import Number, round_money

logger = logging.getLogger(__name__)


class PaymentApp(str, Enum):
    VENMO = "venmo"
    ZELLE = "zelle"
    CASHAPP = "cashapp"


_APP_NAMES = {
    PaymentApp.VENMO: "Venmo",
    PaymentApp.ZELLE: "Zelle",
    PaymentApp.CASHAPP: "Cash App",
}

# Profile attribute holding each app's handle
_PROFILE_FIELDS = {
    PaymentApp.VENMO: "venmo_handle",
    PaymentApp.ZELLE: "zelle_email",
    PaymentApp.CASHAPP: "cashapp_handle",
}


def generate_payment_link(
    app,
    handle: str,
    amount: Number,
    note: Optional[str] = None
) -> Optional[str]:
    """
    Generate a payment deep link for the given app.

    Args:
        app: PaymentApp or its string value.
        handle: Recipient handle; a leading @ or $ is ignored.
        amount: Amount to pay.
        note: Payment note (Venmo only). Defaults to TRIP_SETTLEMENT_NOTE.

    Returns:
        str | None: The link, or None if the app has no deep link.

    Raises:
        ValueError: If the app is not supported.
    """
    app = PaymentApp(app)
    clean_handle = handle.lstrip()
    if clean_handle[:1] in ("@", "$"):
        clean_handle = clean_handle[1:]
    amount_text = f"{round_money(amount):.2f}"

    if app is PaymentApp.VENMO:
        venmo_note = quote(note or get_settings().settlement_note, safe="")
        return (
            f"venmo://paycharge?txn=pay&recipients={clean_handle}"
            f"&amount={amount_text}&note={venmo_note}"
        )

    if app is PaymentApp.CASHAPP:
        return f"https://cash.app/${clean_handle}/{amount_text}"

    return None


def supports_deep_link(app) -> bool:
    """Return True if the app has a deep link format."""
    return PaymentApp(app) in (PaymentApp.VENMO, PaymentApp.CASHAPP)


def get_payment_app_name(app) -> str:
    """Display name for a payment app."""
    return _APP_NAMES[PaymentApp(app)]


def available_payment_methods(profile: Optional[PaymentProfile]) -> list[PaymentApp]:
    """List the apps a member has a handle for, in Venmo, Zelle, Cash App order."""
    if profile is None:
        return []
    return [app for app, field in _PROFILE_FIELDS.items() if getattr(profile, field)]


def settlement_payment_links(
    settlement: Settlement,
    recipient: Member,
    trip_title: str
) -> dict[PaymentApp, Optional[str]]:
    """
    Build payment links for a settlement, one per app the recipient uses.

    Args:
        settlement: The payment to make.
        recipient: The member being paid (settlement.to_user).
        trip_title: Trip name used in the payment note.

    Returns:
        dict: PaymentApp -> link, with None for apps without deep links.

    Raises:
        ValueError: If recipient is not the settlement's payee.
    """
    if recipient.id != settlement.to_user:
        raise ValueError(
            f"recipient '{recipient.id}' is not the payee of this settlement "
            f"('{settlement.to_user}')"
        )

    note = f"{trip_title} - Trip settlement"
    links = {}
    for app in available_payment_methods(recipient.payment_profile):
        handle = getattr(recipient.payment_profile, _PROFILE_FIELDS[app])
        links[app] = generate_payment_link(app, handle, settlement.amount, note)

    if not links:
        logger.debug("Member %s has no payment handles", recipient.id)
    return links
