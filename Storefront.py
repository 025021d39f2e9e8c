"""
================================================================================
Storefront Product Scraper
================================================================================
Author      : Breno Farias da Silva
Created     : 2026-10-14
Description :
    This module provides the Storefront class, which scrapes one product page
    of the regional storefront inside its own headless browser session.

    Key features include:
        - One Chromium instance and one page per product, closed on every exit path
        - Optional region switch through the storefront region modal
        - Product name, price, old price, rating and review count extraction
        - Full page screenshot and product.txt per region and product

Usage:
    1. Import the Storefront class in your main script.
    2. Create an instance with a ScrapeTarget:
            storefront = Storefront(ScrapeTarget("https://shop.example/item-42", "Moscow"))
    3. Call the scrape method:
            result = storefront.scrape()
    4. Files are saved in ./results/{Region}/{Product}/ directory.

Outputs:
    - ScrapeResult with the ProductRecord and the product directory
    - screenshot.jpg and product.txt in the product directory

Dependencies:
    - Python >= 3.8
    - playwright
    - beautifulsoup4
    - colorama

Assumptions & Notes:
    - Requires the Playwright Chromium build (playwright install chromium)
    - Website structure may change over time; selectors live in store_selectors.py
    - Creates output directories automatically if they don't exist
"""

import os  # For reading browser settings from the environment
from colorama import Style  # For coloring the terminal
from playwright.sync_api import sync_playwright  # For browser automation
from product_extractor import ProductExtractor  # Product field extraction
from product_models import ScrapeResult  # Result handed back to the run loop
from product_utils import BackgroundColors, verbose_output  # Terminal output helpers
from region_resolver import RegionResolver  # Region selection
from result_writer import RESULTS_DIRECTORY, ResultWriter  # Screenshot and product.txt output
from store_selectors import DEFAULT_SELECTORS  # Default selector table


# Browser Constants:
HEADLESS = os.getenv("HEADLESS", "True").lower() == "true"  # Headless mode flag
PAGE_LOAD_TIMEOUT = int(os.getenv("PAGE_LOAD_TIMEOUT", "30000"))  # Milliseconds to wait for the product page load
NAVIGATION_TIMEOUT = int(os.getenv("NAVIGATION_TIMEOUT", "30000"))  # Milliseconds to wait for the region switch reload
VIEWPORT = {
    "width": int(os.getenv("VIEWPORT_WIDTH", "1920")),
    "height": int(os.getenv("VIEWPORT_HEIGHT", "800")),
}  # Browser viewport size


# Classes Definitions:


class Storefront:
    """
    Scrapes a single storefront product page in a dedicated browser session.

    The session can also be used as a context manager, in which case the
    browser is launched on enter and always closed on exit.
    """


    def __init__(
        self,
        target,
        selectors=DEFAULT_SELECTORS,
        output_directory=RESULTS_DIRECTORY,
        headless=HEADLESS,
        viewport=None,
        page_load_timeout=PAGE_LOAD_TIMEOUT,
        navigation_timeout=NAVIGATION_TIMEOUT,
        playwright_factory=sync_playwright,
    ):
        """
        Initializes the Storefront scraper with a scrape target.

        :param target: ScrapeTarget with the product URL and the optional region
        :param selectors: StoreSelectors used by the region resolver and the extractor
        :param output_directory: Base directory of the results tree
        :param headless: Whether Chromium runs without a window
        :param viewport: Dict with "width" and "height" (defaults to VIEWPORT)
        :param page_load_timeout: Milliseconds to wait for the product page load
        :param navigation_timeout: Milliseconds to wait for the region switch reload
        :param playwright_factory: Callable returning a Playwright context manager
        :return: None
        """

        self.target = target  # Product URL and requested region
        self.headless = headless  # Headless mode flag for this session
        self.viewport = dict(viewport or VIEWPORT)  # Viewport for the product page
        self.page_load_timeout = page_load_timeout  # Timeout for the initial navigation
        self.playwright_factory = playwright_factory  # Source of the Playwright instance
        self.region_resolver = RegionResolver(selectors, navigation_timeout=navigation_timeout)  # Region selection stage
        self.extractor = ProductExtractor(selectors)  # Extraction stage
        self.writer = ResultWriter(output_directory)  # Output stage
        self.playwright = None  # Placeholder for Playwright instance
        self.browser = None  # Placeholder for browser instance
        self.page = None  # Placeholder for page object

        verbose_output(f"{BackgroundColors.GREEN}Storefront scraper initialized with URL: {BackgroundColors.CYAN}{target.url}{Style.RESET_ALL}")


    def __enter__(self):
        try:  # Launch may fail halfway through
            self.launch_browser()  # Opens the page tab last
        except BaseException:  # Release whatever was opened before re-raising
            self.close_browser()  # __exit__ does not run when __enter__ raises
            raise
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        self.close_browser()  # Always release the browser
        return False  # Never swallow the exception that ended the session


    def launch_browser(self):
        """
        Launches a headless Chromium browser and opens the product page tab.

        :return: None
        """

        print(f"{BackgroundColors.GREEN}Launching browser...{Style.RESET_ALL}")
        self.playwright = self.playwright_factory().start()  # Start Playwright synchronous API
        self.browser = self.playwright.chromium.launch(headless=self.headless)  # Launch Chromium with the configured mode
        verbose_output(f"{BackgroundColors.GREEN}Creating new page...{Style.RESET_ALL}")
        self.page = self.browser.new_page()  # Create new browser page/tab
        self.page.set_viewport_size(self.viewport)  # Set viewport dimensions
        verbose_output(f"{BackgroundColors.GREEN}Browser launched successfully.{Style.RESET_ALL}")


    def close_browser(self):
        """
        Safely closes the page, the browser and the Playwright instance.

        Works on a partially opened session, so it can run after a failed launch.

        :return: None
        """

        print(f"{BackgroundColors.GREEN}Closing browser...{Style.RESET_ALL}")
        for name, close in (("page", "close"), ("browser", "close"), ("playwright", "stop")):  # Innermost resource first
            resource = getattr(self, name)  # Handle, or None when never opened
            if resource is None:  # Never opened
                continue
            try:  # One failing close must not leak the others
                getattr(resource, close)()  # Close or stop the resource
            except Exception as e:  # Report and keep closing
                print(f"{BackgroundColors.YELLOW}Warning during {name} close: {e}{Style.RESET_ALL}")
            setattr(self, name, None)  # Mark as closed


    def load_page(self):
        """
        Navigates to the product URL and waits for the load event.

        :return: None
        """

        print(f"{BackgroundColors.GREEN}Navigating to {BackgroundColors.CYAN}{self.target.url}{BackgroundColors.GREEN}...{Style.RESET_ALL}")
        self.page.goto(self.target.url, wait_until="load", timeout=self.page_load_timeout)  # Wait for the load event


    def scrape(self):
        """
        Runs the whole product pipeline in a fresh browser session.

        The browser is closed whether the pipeline succeeds or raises.

        :return: ScrapeResult
        """

        with self:  # Launch now, close on every exit path
            self.load_page()
            region = self.region_resolver.resolve(self.page, self.target.region)
            print(f"{BackgroundColors.GREEN}Getting product info...{Style.RESET_ALL}")
            record = self.extractor.extract(self.page, region, self.target.url)
            product_directory = self.writer.write(self.page, record)

        return ScrapeResult(record=record, product_directory=product_directory)
