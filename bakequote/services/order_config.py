"""Selection helpers for in-progress order configurations."""

from __future__ import annotations

from bakequote.schemas.catalog import TreatEntry
from bakequote.schemas.order_config import CakeTier, OrderConfiguration, TreatOrderConfiguration, TreatSelection
from bakequote.services.catalog_resolver import ResolvedCatalog

SUMMARY_TREAT_LIMIT: int = 3


def default_tier() -> CakeTier:
    return CakeTier(size="8-round", shape="round", flavor="vanilla", frosting="buttercream")


def set_treat_quantity(
    treats: list[TreatSelection],
    treat_id: str,
    quantity: int,
    catalog: ResolvedCatalog,
) -> list[TreatSelection]:
    """Return a new selection list with one treat's quantity updated.

    Quantity 0 (or less) removes the treat. A positive quantity below the
    treat's minimum is raised to the minimum.
    """
    remaining = [selection for selection in treats if selection.id != treat_id]
    if quantity <= 0:
        return remaining

    entry = catalog.find("treats", treat_id)
    minimum = entry.min_quantity if isinstance(entry, TreatEntry) else 1
    updated = TreatSelection(id=treat_id, quantity=max(quantity, minimum))

    result: list[TreatSelection] = []
    replaced = False
    for selection in treats:
        if selection.id == treat_id:
            if not replaced:
                result.append(updated)
                replaced = True
            continue
        result.append(selection)
    if not replaced:
        result.append(updated)
    return result


def _label(catalog: ResolvedCatalog, category: str, entry_id: str) -> str:
    entry = catalog.find(category, entry_id)
    return entry.label if entry is not None and entry.label else entry_id


def order_summary(config: OrderConfiguration, catalog: ResolvedCatalog) -> str:
    """Short human-readable description of a configuration."""
    if isinstance(config, TreatOrderConfiguration):
        if not config.treats:
            return "No treats selected"
        names = [f"{_label(catalog, 'treats', item.id)} x{item.quantity}" for item in config.treats]
        suffix = "..." if len(names) > SUMMARY_TREAT_LIMIT else ""
        return ", ".join(names[:SUMMARY_TREAT_LIMIT]) + suffix

    if len(config.tiers) == 1:
        tier = config.tiers[0]
        return f"{_label(catalog, 'sizes', tier.size)}, {_label(catalog, 'flavors', tier.flavor)}"
    sizes = [_label(catalog, "sizes", tier.size) for tier in config.tiers]
    return f"{len(config.tiers)}-tier: {' + '.join(sizes)}"
