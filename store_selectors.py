"""
store_selectors.py - CSS selectors for the storefront product page

Author      : Breno Farias da Silva
Created     : 2026-10-12
Description :
    The selector table is an immutable value handed to RegionResolver and
    ProductExtractor when they are built, so a different storefront layout
    only needs a different `StoreSelectors` instance.
"""


from dataclasses import dataclass  # For the immutable selector table


@dataclass(frozen=True)
class StoreSelectors:
    """
    CSS selectors for every element the scraper reads or clicks.
    """

    region_link: str = 'div[class^="FirstHeader_region"]'  # Header control showing the active region
    region_item: str = '[class^="RegionModal_item"]'  # One entry of the region modal list
    price: str = '[class^="Price_priceDesktop"]'  # Current price
    old_price: str = '[class^="BuyQuant_oldPrice"]'  # Price before discount, optional
    rating_count: str = '[itemprop="ratingCount"]'  # Rating micro-format node (value in "content")
    review_count: str = '[itemprop="reviewCount"]'  # Review count micro-format node (value in "content")
    name: str = '[class^="Title_title"]'  # Product title


DEFAULT_SELECTORS = StoreSelectors()  # Selectors for the storefront layout the scraper ships with
