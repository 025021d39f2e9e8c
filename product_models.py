"""
product_models.py - Data records passed between the scraper stages

Author      : Breno Farias da Silva
Created     : 2026-10-12
Description :
    `ScrapeTarget` is one (url, optional region) line of input and
    `ProductRecord` is what the extractor reads from a product page. Both are
    frozen so no stage can change a record another stage already handed on.
"""


from dataclasses import dataclass  # For declaring fixed-schema records
from typing import Optional  # For type hints


@dataclass(frozen=True)
class ScrapeTarget:
    """
    One product URL to scrape and the region to force on it, if any.
    """

    url: str
    region: Optional[str] = None


@dataclass(frozen=True)
class ProductRecord:
    """
    Product fields read from a single product page in a single region.
    """

    name: str
    region: str
    price: float
    rating: float
    review_count: int
    url: str
    price_old: Optional[float] = None  # Only set when the page shows a discounted price


@dataclass(frozen=True)
class ScrapeResult:
    """
    What Storefront.scrape() hands back to the run loop.
    """

    record: ProductRecord
    product_directory: str
