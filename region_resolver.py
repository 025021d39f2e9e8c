"""
region_resolver.py - Storefront region selection

Author      : Breno Farias da Silva
Created     : 2026-10-13
Description :
    The storefront shows prices for one region at a time. `RegionResolver`
    either reads the region the page opened with (the home region), or opens
    the region modal from the header, clicks the entry whose text equals the
    requested region and waits for the page to reload in that region.

    Matching is exact and case-sensitive against the trimmed item text, and
    the first matching entry in rendered order wins.

Dependencies:
    - playwright
    - colorama
"""


from colorama import Style  # For coloring the terminal
from product_utils import BackgroundColors, verbose_output  # Terminal output helpers
from scraper_errors import MissingElementError, RegionNotFoundError  # Structured failure types
from store_selectors import DEFAULT_SELECTORS  # Default selector table


# Browser Constants:
NAVIGATION_TIMEOUT = 30000  # Milliseconds to wait for the region switch to reload the page


# Classes Definitions:


class RegionResolver:
    """
    Establishes the effective region of an already loaded product page.
    """


    def __init__(self, selectors=DEFAULT_SELECTORS, navigation_timeout=NAVIGATION_TIMEOUT):
        """
        :param selectors: StoreSelectors instance with the region_link, region_item and price selectors
        :param navigation_timeout: Milliseconds to wait for navigation after selecting a region
        :return: None
        """

        self.selectors = selectors  # Selector table injected at construction time
        self.navigation_timeout = navigation_timeout  # Timeout for the post-click navigation


    def resolve(self, page, desired_region=None):
        """
        Returns the region the page shows prices for, switching to desired_region first if given.

        :param page: Playwright page already navigated to the product URL
        :param desired_region: Region name to select, or None to keep the home region
        :return: The effective region name
        :raises MissingElementError: If the header region control is missing
        :raises RegionNotFoundError: If no modal entry matches desired_region
        """

        if not desired_region:  # No region requested, keep whatever the page opened with
            region = self.read_home_region(page)  # Label shown in the header
            print(
                f"{BackgroundColors.YELLOW}Region not selected. Used home region {BackgroundColors.CYAN}\"{region}\"{BackgroundColors.YELLOW}.{Style.RESET_ALL}"
            )
            return region

        print(f"{BackgroundColors.GREEN}Selecting region {BackgroundColors.CYAN}\"{desired_region}\"{BackgroundColors.GREEN}...{Style.RESET_ALL}")
        self.open_region_modal(page)  # Header click, wait for the list
        items, texts = self.read_region_items(page)  # Entries and their trimmed texts

        match_index = self.find_region_index(texts, desired_region)  # First exact match in rendered order
        if match_index is None:  # Requested region is not offered by the storefront
            raise RegionNotFoundError(desired_region, texts)

        self.select_region_item(page, items[match_index])  # Click and wait for the reload
        return desired_region


    def read_home_region(self, page):
        """
        Reads the region label from the header.

        :param page: Playwright page
        :return: Trimmed region label text
        """

        region_link = page.query_selector(self.selectors.region_link)  # Header control with the active region label
        if region_link is None:  # Without the header control the region is unknown
            raise MissingElementError("region_link", self.selectors.region_link)
        return region_link.inner_text().strip()


    def open_region_modal(self, page):
        """
        Clicks the header region control and waits for the modal list.

        :param page: Playwright page
        :return: None
        """

        region_link = page.wait_for_selector(self.selectors.region_link)  # Header control rendered by the page scripts
        if region_link is None:  # Header control never rendered
            raise MissingElementError("region_link", self.selectors.region_link)
        region_link.click()  # Opens the region modal
        page.wait_for_selector(self.selectors.region_item)  # Modal list is rendered


    def read_region_items(self, page):
        """
        Collects every region entry and its trimmed text, in rendered order.

        All texts are read before any matching happens, so the search below
        always sees the list in the order the page rendered it.

        :param page: Playwright page with the region modal open
        :return: Tuple of (element handles, trimmed texts)
        """

        items = page.query_selector_all(self.selectors.region_item)  # Every entry of the modal list
        texts = [item.inner_text().strip() for item in items]  # Read all texts before matching
        verbose_output(f"{BackgroundColors.GREEN}Regions offered: {BackgroundColors.CYAN}{', '.join(texts)}{Style.RESET_ALL}")
        return items, texts


    @staticmethod
    def find_region_index(texts, desired_region):
        """
        Finds the first entry whose text equals the requested region.

        :param texts: Trimmed region entry texts in rendered order
        :param desired_region: Requested region name, compared as given
        :return: Index of the first exact match, or None
        """

        for index, text in enumerate(texts):  # Rendered order, first match wins
            if text == desired_region:  # Exact, case-sensitive comparison
                return index
        return None


    def select_region_item(self, page, item):
        """
        Clicks a region entry and waits until the page has reloaded in that region.

        :param page: Playwright page
        :param item: Element handle of the region entry to click
        :return: None
        """

        with page.expect_navigation(wait_until="networkidle", timeout=self.navigation_timeout):  # Region switch reloads the page
            item.click()  # Selecting the entry triggers the navigation
        page.wait_for_selector(self.selectors.price)  # Price of the new region has been rendered
        verbose_output(f"{BackgroundColors.GREEN}Region switched, price element is visible.{Style.RESET_ALL}")
