"""
product_extractor.py - Product field extraction from the rendered product page

Author      : Breno Farias da Silva
Created     : 2026-10-13
Description :
    `ProductExtractor` reads the rendered HTML of a product page (after the
    region was resolved) and turns the title, price, old price, rating and
    review count nodes into a `ProductRecord`. The HTML is parsed with
    BeautifulSoup and queried with the CSS selectors of a `StoreSelectors`
    table, so the same extraction runs against a live page or a saved HTML
    file.

    Required fields: name, price, rating, review count. A missing node for
    any of them raises MissingElementError. The old price is optional: a
    missing node, unparsable text or a zero value all mean "no discount".

Dependencies:
    - beautifulsoup4
    - colorama
"""


from bs4 import BeautifulSoup  # For parsing HTML content
from colorama import Style  # For coloring the terminal
from product_models import ProductRecord  # Extracted record type
from product_utils import BackgroundColors, format_decimal, parse_decimal, parse_integer, verbose_output  # Parsing and output helpers
from scraper_errors import MissingElementError, ValueParseError  # Structured failure types
from store_selectors import DEFAULT_SELECTORS  # Default selector table


# Classes Definitions:


class ProductExtractor:
    """
    Reads product fields out of a product page using a selector table.
    """


    def __init__(self, selectors=DEFAULT_SELECTORS):
        """
        :param selectors: StoreSelectors instance used for every lookup
        :return: None
        """

        self.selectors = selectors  # Selector table injected at construction time


    def extract(self, page, region, url):
        """
        Extracts the product record from a live Playwright page.

        :param page: Playwright page showing the product in the effective region
        :param region: Effective region name
        :param url: Product URL the page was opened with
        :return: ProductRecord
        """

        verbose_output(f"{BackgroundColors.GREEN}Extracting rendered HTML...{Style.RESET_ALL}")
        return self.extract_from_html(page.content(), region, url)  # Fully rendered HTML after the region switch


    def extract_from_html(self, html_content, region, url):
        """
        Extracts the product record from rendered HTML.

        :param html_content: Rendered HTML string
        :param region: Effective region name
        :param url: Product URL
        :return: ProductRecord
        """

        soup = BeautifulSoup(html_content, "html.parser")  # Parse HTML content into BeautifulSoup object

        name = self.extract_product_name(soup)  # Required
        price = self.extract_current_price(soup)  # Required
        price_old = self.extract_old_price(soup)  # Optional, None without a discount
        rating = self.extract_rating(soup)  # Required
        review_count = self.extract_review_count(soup)  # Required

        record = ProductRecord(
            name=name,
            region=region,
            price=price,
            rating=rating,
            review_count=review_count,
            url=url,
            price_old=price_old,
        )  # Fixed-schema record handed to the writer
        self.print_product_info(record)  # Verbose summary of the extracted fields
        return record


    def require_element(self, soup, selector_name):
        """
        Returns the first element matching a named selector, raising if there is none.

        :param soup: BeautifulSoup object containing the parsed HTML
        :param selector_name: Field name in the StoreSelectors table
        :return: Matching bs4 Tag
        """

        selector = getattr(self.selectors, selector_name)  # CSS selector for this field
        element = soup.select_one(selector)  # First match in document order
        if element is None:  # Required node is not on the page
            raise MissingElementError(selector_name, selector)
        return element


    def extract_product_name(self, soup):
        """
        Extracts the product name from the title element.

        :param soup: BeautifulSoup object containing the parsed HTML
        :return: Trimmed product name
        """

        return element_text(self.require_element(soup, "name"))


    def extract_current_price(self, soup):
        """
        Extracts the current price, reading commas as decimal points.

        :param soup: BeautifulSoup object containing the parsed HTML
        :return: Price as float
        """

        return parse_decimal(element_text(self.require_element(soup, "price")), field="price")


    def extract_old_price(self, soup):
        """
        Extracts the price before discount if the page shows one.

        An old price that is missing, not a number or zero is treated as no discount.

        :param soup: BeautifulSoup object containing the parsed HTML
        :return: Old price as float, or None when there is no discount
        """

        element = soup.select_one(self.selectors.old_price)  # Only rendered for discounted products
        if element is None:  # No discount on this product
            return None
        try:  # The old price never fails the product
            old_price = parse_decimal(element_text(element), field="priceOld")
        except ValueParseError:  # Empty or non-numeric old price node
            verbose_output(f"{BackgroundColors.YELLOW}Old price is not a number, ignoring it.{Style.RESET_ALL}")
            return None
        return old_price or None  # A zero old price is not a discount


    def extract_rating(self, soup):
        """
        Extracts the rating from the "content" attribute of the rating micro-format node.

        The attribute is a machine-readable number, so commas are not decimal points here.

        :param soup: BeautifulSoup object containing the parsed HTML
        :return: Rating as float
        """

        element = self.require_element(soup, "rating_count")  # Micro-format node, value in "content"
        return parse_decimal(element.get("content", ""), field="rating", comma_decimal=False)


    def extract_review_count(self, soup):
        """
        Extracts the number of reviews from the "content" attribute of the review count node.

        :param soup: BeautifulSoup object containing the parsed HTML
        :return: Review count as int
        """

        element = self.require_element(soup, "review_count")  # Micro-format node, value in "content"
        return parse_integer(element.get("content", ""), field="reviewCount")


    def print_product_info(self, record):
        """
        Prints the extracted product information when verbose output is enabled.

        :param record: ProductRecord
        :return: None
        """

        old_price = format_decimal(record.price_old) if record.price_old is not None else "N/A"  # Placeholder without a discount
        verbose_output(
            f"{BackgroundColors.GREEN}Product information extracted successfully:\n"
            f"  {BackgroundColors.CYAN}Name:{BackgroundColors.GREEN} {record.name}\n"
            f"  {BackgroundColors.CYAN}Price:{BackgroundColors.GREEN} {format_decimal(record.price)}\n"
            f"  {BackgroundColors.CYAN}Old Price:{BackgroundColors.GREEN} {old_price}\n"
            f"  {BackgroundColors.CYAN}Rating:{BackgroundColors.GREEN} {format_decimal(record.rating)} ({record.review_count} reviews){Style.RESET_ALL}"
        )


# Functions Definitions:


def element_text(element):
    """
    Returns the visible text of an element with surrounding whitespace removed.

    :param element: bs4 Tag
    :return: Trimmed text
    """

    return element.get_text().strip()  # Text of the node and all its descendants
