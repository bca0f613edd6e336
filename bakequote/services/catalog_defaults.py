"""Platform default price lists.

These tables are process-wide constants. They are tuples of frozen models and
must never be mutated; tenant overrides always produce new resolved lists.
"""

from decimal import Decimal
from types import MappingProxyType

from bakequote.schemas.catalog import (
    PICKUP_OPTION_ID,
    AddonEntry,
    CatalogEntry,
    FlatPriceEntry,
    ModifierEntry,
    SizeEntry,
    TreatEntry,
)


CATALOG_CATEGORIES: tuple[str, ...] = (
    "sizes",
    "shapes",
    "flavors",
    "frostings",
    "decorations",
    "deliveryOptions",
    "addons",
    "treats",
)


class UnknownCategoryError(KeyError):
    """Raised for a category name outside CATALOG_CATEGORIES."""


def _size(entry_id: str, label: str, servings: str, base_price: str) -> SizeEntry:
    return SizeEntry(id=entry_id, label=label, servings=servings, base_price=Decimal(base_price), enabled=True)


def _modifier(entry_id: str, label: str, price_modifier: str) -> ModifierEntry:
    return ModifierEntry(id=entry_id, label=label, price_modifier=Decimal(price_modifier), enabled=True)


def _flat(entry_id: str, label: str, price: str) -> FlatPriceEntry:
    return FlatPriceEntry(id=entry_id, label=label, price=Decimal(price), enabled=True)


CAKE_SIZES: tuple[SizeEntry, ...] = (
    _size("6-round", '6" Round', "10-12", "45"),
    _size("8-round", '8" Round', "20-24", "65"),
    _size("10-round", '10" Round', "35-40", "95"),
    _size("12-round", '12" Round', "50-56", "125"),
    _size("quarter-sheet", "Quarter Sheet", "20-24", "55"),
    _size("half-sheet", "Half Sheet", "40-48", "85"),
    _size("full-sheet", "Full Sheet", "80-96", "145"),
)


CAKE_SHAPES: tuple[ModifierEntry, ...] = (
    _modifier("round", "Round", "0"),
    _modifier("square", "Square", "10"),
    _modifier("heart", "Heart", "15"),
    _modifier("custom", "Custom", "25"),
)


CAKE_FLAVORS: tuple[ModifierEntry, ...] = (
    _modifier("vanilla", "Vanilla", "0"),
    _modifier("chocolate", "Chocolate", "0"),
    _modifier("red-velvet", "Red Velvet", "10"),
    _modifier("lemon", "Lemon", "5"),
    _modifier("marble", "Marble", "5"),
    _modifier("carrot", "Carrot", "10"),
    _modifier("funfetti", "Funfetti", "5"),
)


FROSTING_TYPES: tuple[ModifierEntry, ...] = (
    _modifier("buttercream", "Buttercream", "0"),
    _modifier("cream-cheese", "Cream Cheese", "10"),
    _modifier("fondant", "Fondant", "25"),
    _modifier("ganache", "Ganache", "15"),
    _modifier("whipped-cream", "Whipped Cream", "5"),
)


DECORATIONS: tuple[FlatPriceEntry, ...] = (
    _flat("fresh-flowers", "Fresh Flowers", "35"),
    _flat("edible-flowers", "Edible Flowers", "25"),
    _flat("custom-topper", "Custom Cake Topper", "20"),
    _flat("edible-image", "Edible Image", "15"),
    _flat("gold-leaf", "Gold/Silver Leaf", "30"),
    _flat("sprinkles", "Sprinkles", "5"),
    _flat("fruit-topping", "Fruit Topping", "20"),
    _flat("chocolate-drip", "Chocolate Drip", "15"),
    _flat("macarons", "Macarons (6)", "18"),
    _flat("meringue-kisses", "Meringue Kisses", "12"),
)


DELIVERY_OPTIONS: tuple[FlatPriceEntry, ...] = (
    _flat(PICKUP_OPTION_ID, "Pickup", "0"),
    _flat("local", "Local Delivery (within 15 miles)", "25"),
    _flat("extended", "Extended Delivery (15-30 miles)", "45"),
)


# Flat add-ons priced per dozen take a quantity multiplier (0.5 = half dozen).
ADDONS: tuple[AddonEntry, ...] = (
    AddonEntry(id="dipped-strawberries", label="Chocolate Dipped Strawberries", price=Decimal("30"), enabled=True),
    AddonEntry(id="chocolate-apples", label="Chocolate Covered Apples", price=Decimal("36"), enabled=True),
    AddonEntry(id="candied-apples", label="Candied Apples", price=Decimal("30"), enabled=True),
    AddonEntry(
        id="full-sweets-table",
        label="Full Sweets Table",
        price=Decimal("5"),
        pricing_type="per-attendee",
        min_attendees=20,
        enabled=True,
    ),
    AddonEntry(
        id="dessert-bar",
        label="Dessert Bar",
        price=Decimal("3.5"),
        pricing_type="per-attendee",
        min_attendees=25,
        enabled=True,
    ),
    AddonEntry(id="setup-service", label="Setup Service", price=Decimal("50"), enabled=True),
)


TREATS: tuple[TreatEntry, ...] = (
    TreatEntry(
        id="cupcakes-standard",
        label="Standard Cupcakes",
        description="Per dozen, choice of flavor and frosting",
        unit_price=Decimal("36"),
        min_quantity=1,
        enabled=True,
    ),
    TreatEntry(
        id="cupcakes-mini",
        label="Mini Cupcakes",
        description="Per dozen, bite-sized",
        unit_price=Decimal("24"),
        min_quantity=2,
        enabled=True,
    ),
    TreatEntry(
        id="cookies-decorated",
        label="Decorated Sugar Cookies",
        description="Per dozen, custom royal icing",
        unit_price=Decimal("42"),
        min_quantity=1,
        enabled=True,
    ),
    TreatEntry(
        id="cake-pops",
        label="Cake Pops",
        description="Per dozen",
        unit_price=Decimal("30"),
        min_quantity=1,
        enabled=True,
    ),
    TreatEntry(
        id="brownies",
        label="Fudge Brownies",
        description="Per dozen",
        unit_price=Decimal("28"),
        min_quantity=1,
        enabled=True,
    ),
    TreatEntry(
        id="macarons-box",
        label="French Macarons",
        description="Box of 12",
        unit_price=Decimal("32"),
        min_quantity=1,
        enabled=True,
    ),
)


DEFAULT_CATALOG: MappingProxyType[str, tuple[CatalogEntry, ...]] = MappingProxyType(
    {
        "sizes": CAKE_SIZES,
        "shapes": CAKE_SHAPES,
        "flavors": CAKE_FLAVORS,
        "frostings": FROSTING_TYPES,
        "decorations": DECORATIONS,
        "deliveryOptions": DELIVERY_OPTIONS,
        "addons": ADDONS,
        "treats": TREATS,
    }
)


ENTRY_MODELS: MappingProxyType[str, type[CatalogEntry]] = MappingProxyType(
    {
        "sizes": SizeEntry,
        "shapes": ModifierEntry,
        "flavors": ModifierEntry,
        "frostings": ModifierEntry,
        "decorations": FlatPriceEntry,
        "deliveryOptions": FlatPriceEntry,
        "addons": AddonEntry,
        "treats": TreatEntry,
    }
)


def ensure_category(category: str) -> str:
    if category not in DEFAULT_CATALOG:
        raise UnknownCategoryError(category)
    return category


def default_entries(category: str) -> tuple[CatalogEntry, ...]:
    """Return the default entries for a category in declaration order."""
    return DEFAULT_CATALOG[ensure_category(category)]


def entry_model(category: str) -> type[CatalogEntry]:
    return ENTRY_MODELS[ensure_category(category)]


def default_ids(category: str) -> frozenset[str]:
    return frozenset(entry.id for entry in default_entries(category))
