"""Schema exports."""

from bakequote.schemas.auth import BakerResponse, LoginRequest, PublicBakerResponse, RegisterRequest, TokenResponse
from bakequote.schemas.catalog import (
    AddonEntry,
    CatalogEntry,
    FlatPriceEntry,
    ModifierEntry,
    SizeEntry,
    TenantCatalogOverride,
    TreatEntry,
)
from bakequote.schemas.lead import CalculatorSubmitRequest, ContactInfo, LeadSubmission
from bakequote.schemas.order_config import (
    AddonSelection,
    CakeOrderConfiguration,
    CakeTier,
    PricedTotals,
    TreatOrderConfiguration,
    TreatSelection,
)

__all__ = [
    "BakerResponse",
    "LoginRequest",
    "PublicBakerResponse",
    "RegisterRequest",
    "TokenResponse",
    "AddonEntry",
    "CatalogEntry",
    "FlatPriceEntry",
    "ModifierEntry",
    "SizeEntry",
    "TenantCatalogOverride",
    "TreatEntry",
    "CalculatorSubmitRequest",
    "ContactInfo",
    "LeadSubmission",
    "AddonSelection",
    "CakeOrderConfiguration",
    "CakeTier",
    "PricedTotals",
    "TreatOrderConfiguration",
    "TreatSelection",
]
