"""Per-line pricing for tiers, decorations, add-ons, treats and delivery.

All functions are pure and work at full Decimal precision; rounding happens
only when totals are finalized. A reference to an id missing from the
resolved catalog prices as zero and is logged, it never raises.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from bakequote.schemas.catalog import AddonEntry, CatalogEntry, FlatPriceEntry, ModifierEntry, SizeEntry, TreatEntry
from bakequote.schemas.order_config import AddonSelection, CakeTier, TreatSelection
from bakequote.services.catalog_defaults import PICKUP_OPTION_ID
from bakequote.services.catalog_resolver import ResolvedCatalog
from bakequote.utils.money import ZERO

logger = logging.getLogger(__name__)


def _lookup(catalog: ResolvedCatalog, category: str, entry_id: str) -> CatalogEntry | None:
    entry = catalog.find(category, entry_id)
    if entry is None:
        logger.warning("[PRICING] Unresolved %s reference id=%s; pricing as 0", category, entry_id)
    return entry


def _modifier(catalog: ResolvedCatalog, category: str, entry_id: str) -> Decimal:
    entry = _lookup(catalog, category, entry_id)
    if not isinstance(entry, ModifierEntry):
        return ZERO
    return entry.price_modifier


def tier_price(tier: CakeTier, catalog: ResolvedCatalog) -> Decimal:
    """Size base price plus shape, flavor and frosting modifiers."""
    size = _lookup(catalog, "sizes", tier.size)
    base = size.base_price if isinstance(size, SizeEntry) else ZERO
    return (
        base
        + _modifier(catalog, "shapes", tier.shape)
        + _modifier(catalog, "flavors", tier.flavor)
        + _modifier(catalog, "frostings", tier.frosting)
    )


def decoration_price(decoration_id: str, catalog: ResolvedCatalog) -> Decimal:
    entry = _lookup(catalog, "decorations", decoration_id)
    return entry.price if isinstance(entry, FlatPriceEntry) else ZERO


def addon_price(selection: AddonSelection, catalog: ResolvedCatalog) -> Decimal:
    """Flat add-ons multiply by quantity (default 1), per-attendee by attendees (default minimum)."""
    addon = _lookup(catalog, "addons", selection.id)
    if not isinstance(addon, AddonEntry):
        return ZERO
    if addon.pricing_type == "per-attendee":
        attendees = selection.attendees
        if attendees is None:
            attendees = addon.min_attendees if addon.min_attendees is not None else 0
        return addon.price * attendees
    quantity = selection.quantity if selection.quantity is not None else Decimal("1")
    return addon.price * quantity


def treat_line_price(selection: TreatSelection, catalog: ResolvedCatalog) -> Decimal:
    treat = _lookup(catalog, "treats", selection.id)
    if not isinstance(treat, TreatEntry):
        return ZERO
    if treat.enabled is False:
        logger.info("[PRICING] Treat id=%s is disabled by the baker; pricing as 0", selection.id)
        return ZERO
    return treat.unit_price * selection.quantity


def delivery_price(option_id: str, catalog: ResolvedCatalog) -> Decimal:
    if option_id == PICKUP_OPTION_ID:
        return ZERO
    entry = _lookup(catalog, "deliveryOptions", option_id)
    return entry.price if isinstance(entry, FlatPriceEntry) else ZERO
