"""Cup label text and hand-off to the label printer."""

from __future__ import annotations

import logging
from typing import Protocol

from awaken.core.config import settings
from awaken.schemas.customization import ChocolateChoice, MilkChoice, ShotCount, SyrupChoice
from awaken.schemas.label import LabelFormat
from awaken.schemas.order import Order, OrderItem
from awaken.services.storage_service import StorageService

logger = logging.getLogger(__name__)

ELLIPSIS: str = "..."
SYRUP_MAX_CHARS: int = 8
SYRUP_ABBREVIATIONS: dict[str, str] = {
    "Watermelon": "Wtrm",
    "Blueberry": "Blbry",
    "Strawberry": "Strw",
}
ESPRESSO_DRINK_KEYWORDS: tuple[str, ...] = ("mocha", "latte", "americano")
DEFAULT_ESPRESSO_SHOTS: int = 2


class LabelPrinter(Protocol):
    """Device driver able to print a label on a networked printer."""

    def print_label(self, label: LabelFormat, *, address: str, model: str) -> bool:
        ...


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[:max_length - len(ELLIPSIS)]}{ELLIPSIS}"


def _abbreviate_drink_name(item: OrderItem) -> str:
    name = item.drink_name.lower()
    if "mocha" in name:
        return "Mocha"
    if "chai" in name:
        return "Chai"
    if "latte" in name:
        return "Latte"
    if "hot chocolate" in name:
        chocolate = item.first_customization("chocolate")
        is_white = isinstance(chocolate, ChocolateChoice) and chocolate.chocolate == "white"
        return "Y Choco" if is_white else "H Choco"
    if "americano" in name:
        return "Americano"
    if "soda" in name:
        return "Soda"
    return item.drink_name


def abbreviate_syrup(flavor: str) -> str:
    if len(flavor) <= SYRUP_MAX_CHARS:
        return flavor
    return SYRUP_ABBREVIATIONS.get(flavor, flavor[:4])


def default_shots(drink_name: str) -> int:
    """Espresso drinks come with a double shot; everything else with none."""
    name = drink_name.lower()
    if any(keyword in name for keyword in ESPRESSO_DRINK_KEYWORDS):
        return DEFAULT_ESPRESSO_SHOTS
    return 0


def _drink_summary(item: OrderItem) -> str:
    parts = [_abbreviate_drink_name(item)]

    shots = item.first_customization("shots")
    shot_count = shots.count if isinstance(shots, ShotCount) else 0
    if shot_count != default_shots(item.drink_name):
        parts.append(f"{shot_count} shot{'s' if shot_count > 1 else ''}")

    milk = item.first_customization("milk")
    if isinstance(milk, MilkChoice) and milk.milk == "oat":
        parts.append("oat")

    syrup = item.first_customization("syrup")
    if isinstance(syrup, SyrupChoice) and syrup.flavor:
        parts.append(abbreviate_syrup(syrup.flavor))

    if item.has_customization("dirty"):
        parts.append("dirty")
    if item.has_customization("cream"):
        parts.append("+cream")

    return _truncate(" ".join(parts), settings.label_line2_max_chars)


def format_label_text(order: Order) -> LabelFormat:
    """Customer name on the first line, first drink summarized on the second."""
    line1 = _truncate(order.customer_name, settings.label_line1_max_chars)
    line2 = _drink_summary(order.items[0]) if order.items else "No items"
    return LabelFormat(line1=line1, line2=line2)


def print_order_label(storage: StorageService, printer: LabelPrinter, order: Order) -> bool:
    """Send the order's label to the configured printer.

    Returns False when no printer address is stored or printing fails.
    """
    address = storage.get_setting(settings.printer_address_key)
    if not address:
        logger.info("[PRINT] No printer configured; skipping label for %s", order.id)
        return False

    label = format_label_text(order)
    try:
        printed = printer.print_label(label, address=address, model=settings.printer_model)
    except Exception:
        logger.exception("[PRINT] Failed to print label for %s", order.id)
        return False

    logger.info("[PRINT] Label for %s sent to %s", order.id, address)
    return bool(printed)
