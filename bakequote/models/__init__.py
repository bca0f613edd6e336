"""Application models package."""

from bakequote.models.baker import Baker
from bakequote.models.customer import Customer
from bakequote.models.featured_item import FeaturedItem
from bakequote.models.lead import Lead
from bakequote.models.quote import Quote, QuoteItem

__all__ = ["Baker", "Customer", "FeaturedItem", "Lead", "Quote", "QuoteItem"]
