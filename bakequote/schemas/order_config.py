"""Customer order configuration schemas."""

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import ConfigDict, Field

from bakequote.schemas.catalog import PICKUP_OPTION_ID, CamelModel


class CakeTier(CamelModel):
    """One cake tier referencing size, shape, flavor and frosting ids."""

    size: str
    shape: str
    flavor: str
    frosting: str


class AddonSelection(CamelModel):
    """Selected add-on; ``attendees`` applies to per-attendee add-ons, ``quantity`` to flat ones."""

    id: str
    quantity: Decimal | None = Field(default=None, gt=0)
    attendees: int | None = Field(default=None, ge=0)


class TreatSelection(CamelModel):
    id: str
    quantity: int = Field(ge=1)


class CakeOrderConfiguration(CamelModel):
    category: Literal["cake"] = "cake"
    tiers: list[CakeTier] = Field(min_length=1)
    decorations: list[str] = Field(default_factory=list)
    addons: list[AddonSelection] = Field(default_factory=list)
    delivery_option: str = PICKUP_OPTION_ID


class TreatOrderConfiguration(CamelModel):
    category: Literal["treat"] = "treat"
    treats: list[TreatSelection] = Field(default_factory=list)
    delivery_option: str = PICKUP_OPTION_ID


OrderConfiguration = Annotated[
    Union[CakeOrderConfiguration, TreatOrderConfiguration],
    Field(discriminator="category"),
]


class PricedTotals(CamelModel):
    """Derived totals for one configuration; never persisted on its own."""

    model_config = ConfigDict(frozen=True)

    tiers_total: Decimal = Decimal("0.00")
    decorations_total: Decimal = Decimal("0.00")
    addons_total: Decimal = Decimal("0.00")
    treats_total: Decimal = Decimal("0.00")
    subtotal: Decimal
    delivery_total: Decimal
    tax_rate: Decimal
    tax: Decimal
    total: Decimal


class EstimateRequest(CamelModel):
    configuration: OrderConfiguration
