"""Order totalizer shared by the public order page, quote builder and fast quotes."""

from __future__ import annotations

from decimal import Decimal

from bakequote.core.config import settings
from bakequote.schemas.order_config import CakeOrderConfiguration, OrderConfiguration, PricedTotals, TreatOrderConfiguration
from bakequote.services.catalog_resolver import ResolvedCatalog
from bakequote.services.line_pricing import addon_price, decoration_price, delivery_price, tier_price, treat_line_price
from bakequote.utils.money import ZERO, quantize_money


def resolve_tax_rate(tax_rate: Decimal | None) -> Decimal:
    """Return the effective tax rate, rejecting values outside 0..1."""
    rate = settings.default_tax_rate if tax_rate is None else Decimal(tax_rate)
    if rate < 0 or rate > 1:
        raise ValueError("Tax rate must be between 0 and 1")
    return rate


def apply_tax(amount: Decimal, tax_rate: Decimal | None = None) -> Decimal:
    """Tax on a full-precision amount, rounded to currency precision."""
    return quantize_money(amount * resolve_tax_rate(tax_rate))


def _finalize(
    *,
    subtotal: Decimal,
    delivery: Decimal,
    tax_rate: Decimal | None,
    tiers_total: Decimal = ZERO,
    decorations_total: Decimal = ZERO,
    addons_total: Decimal = ZERO,
    treats_total: Decimal = ZERO,
) -> PricedTotals:
    rate = resolve_tax_rate(tax_rate)
    subtotal = max(subtotal, ZERO)
    delivery = max(delivery, ZERO)
    tax = apply_tax(subtotal + delivery, rate)
    rounded_subtotal = quantize_money(subtotal)
    rounded_delivery = quantize_money(delivery)
    return PricedTotals(
        tiers_total=quantize_money(max(tiers_total, ZERO)),
        decorations_total=quantize_money(max(decorations_total, ZERO)),
        addons_total=quantize_money(max(addons_total, ZERO)),
        treats_total=quantize_money(max(treats_total, ZERO)),
        subtotal=rounded_subtotal,
        delivery_total=rounded_delivery,
        tax_rate=rate,
        tax=tax,
        total=rounded_subtotal + rounded_delivery + tax,
    )


def compute_total(
    config: OrderConfiguration,
    catalog: ResolvedCatalog,
    tax_rate: Decimal | None = None,
) -> PricedTotals:
    """Price a configuration against a resolved catalog.

    Subtotal covers tiers, decorations and add-ons for cakes, or treat lines
    for treat orders. Delivery is tracked separately and taxed together with
    the subtotal. Rounding is applied once, here.
    """
    delivery = delivery_price(config.delivery_option, catalog)

    if isinstance(config, CakeOrderConfiguration):
        tiers_total = sum((tier_price(tier, catalog) for tier in config.tiers), ZERO)
        decorations_total = sum((decoration_price(item, catalog) for item in config.decorations), ZERO)
        addons_total = sum((addon_price(selection, catalog) for selection in config.addons), ZERO)
        return _finalize(
            subtotal=tiers_total + decorations_total + addons_total,
            delivery=delivery,
            tax_rate=tax_rate,
            tiers_total=tiers_total,
            decorations_total=decorations_total,
            addons_total=addons_total,
        )

    if isinstance(config, TreatOrderConfiguration):
        treats_total = sum((treat_line_price(selection, catalog) for selection in config.treats), ZERO)
        return _finalize(subtotal=treats_total, delivery=delivery, tax_rate=tax_rate, treats_total=treats_total)

    raise TypeError(f"Unsupported order configuration: {type(config).__name__}")


def fast_quote_totals(unit_price: Decimal, quantity: int = 1, tax_rate: Decimal | None = None) -> PricedTotals:
    """Totals for a pre-priced featured item; no delivery line."""
    return _finalize(subtotal=Decimal(unit_price) * quantity, delivery=ZERO, tax_rate=tax_rate)
