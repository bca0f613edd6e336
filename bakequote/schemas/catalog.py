"""Catalog entry schemas for every pricing category."""

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PricingType = Literal["flat", "per-attendee"]
PICKUP_OPTION_ID: str = "pickup"


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CatalogEntry(CamelModel):
    """Common fields of a selectable, priced option.

    ``enabled`` is three-state: explicit ``False`` disables the entry, ``True``
    or ``None`` keeps it selectable.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    enabled: bool | None = None

    @property
    def is_active(self) -> bool:
        return self.enabled is not False


class SizeEntry(CatalogEntry):
    servings: str = ""
    base_price: Decimal = Decimal("0")


class ModifierEntry(CatalogEntry):
    """Shape, flavor and frosting entries add a modifier to the tier base price."""

    price_modifier: Decimal = Decimal("0")


class FlatPriceEntry(CatalogEntry):
    """Decoration and delivery entries carry a flat price."""

    price: Decimal = Decimal("0")


class AddonEntry(CatalogEntry):
    price: Decimal = Decimal("0")
    pricing_type: PricingType = "flat"
    min_attendees: int | None = None


class TreatEntry(CatalogEntry):
    description: str = ""
    unit_price: Decimal = Decimal("0")
    min_quantity: int = 1


class TenantCatalogOverride(CamelModel):
    """Sparse per-tenant override document, one ordered entry list per category."""

    sizes: list[SizeEntry] | None = None
    shapes: list[ModifierEntry] | None = None
    flavors: list[ModifierEntry] | None = None
    frostings: list[ModifierEntry] | None = None
    decorations: list[FlatPriceEntry] | None = None
    delivery_options: list[FlatPriceEntry] | None = None
    addons: list[AddonEntry] | None = None
    treats: list[TreatEntry] | None = None

    def to_document(self) -> dict[str, list[dict[str, Any]]]:
        """Return the JSON document persisted on the baker row."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude_unset=True)


class CatalogEntryToggle(BaseModel):
    """Payload to enable/disable one catalog entry."""

    enabled: bool
