"""
result_writer.py - Persists a product record and its screenshot

Author      : Breno Farias da Silva
Created     : 2026-10-13
Description :
    Each scraped product gets its own directory,
    `<results>/<region with "." and " " replaced by "_">/<last URL segment>/`,
    holding a full-page `screenshot.jpg` and a `product.txt` made of
    `key=value` lines. Writing the same product again overwrites both files.

Dependencies:
    - colorama
"""


import os  # For building output paths
from colorama import Style  # For coloring the terminal
from product_utils import BackgroundColors, create_directory, format_decimal, sanitize_region_dir_name, url_tail, verbose_output  # Naming and output helpers
from scraper_errors import OutputWriteError  # Raised when product.txt cannot be written


# Output Constants:
RESULTS_DIRECTORY = "./results"  # Base directory of the results tree
SCREENSHOT_FILENAME = "screenshot.jpg"  # Full page screenshot file name
PRODUCT_FILENAME = "product.txt"  # Product record file name

# product.txt keys in output order, mapped to ProductRecord attributes
PRODUCT_FIELDS = (
    ("name", "name"),
    ("region", "region"),
    ("price", "price"),
    ("rating", "rating"),
    ("reviewCount", "review_count"),
    ("url", "url"),
    ("priceOld", "price_old"),
)
DECIMAL_FIELDS = {"price", "rating", "price_old"}  # Attributes rendered with one fractional digit


# Classes Definitions:


class ResultWriter:
    """
    Writes scraped products into the results tree.
    """


    def __init__(self, output_directory=RESULTS_DIRECTORY):
        """
        :param output_directory: Base directory of the results tree
        :return: None
        """

        self.output_directory = output_directory  # Base of the <region>/<product> tree


    def product_directory(self, record):
        """
        Computes the output directory of a product record.

        :param record: ProductRecord
        :return: Path of the product directory
        """

        return os.path.join(self.output_directory, sanitize_region_dir_name(record.region), url_tail(record.url))


    def write(self, page, record):
        """
        Saves the page screenshot and the product file.

        :param page: Playwright page showing the product
        :param record: ProductRecord to serialize
        :return: Path of the product directory
        """

        product_dir = self.product_directory(record)  # <results>/<region>/<url tail>
        create_directory(os.path.abspath(product_dir), product_dir)  # Region and product directories

        print(f"{BackgroundColors.GREEN}Taking a full page screenshot...{Style.RESET_ALL}")
        page.screenshot(path=os.path.join(product_dir, SCREENSHOT_FILENAME), full_page=True)  # Whole scrollable page, not just the viewport

        print(f"{BackgroundColors.GREEN}Saving product info to file...{Style.RESET_ALL}")
        self.write_product_file(product_dir, record)  # Overwrites an earlier product.txt

        return product_dir


    def write_product_file(self, product_dir, record):
        """
        Writes product.txt, replacing any earlier version.

        :param product_dir: Product output directory
        :param record: ProductRecord to serialize
        :return: Path of the written file
        """

        product_file = os.path.join(product_dir, PRODUCT_FILENAME)  # Path of the product file
        try:  # Try to write the product file
            with open(product_file, "w", encoding="utf-8") as f:  # Truncate any earlier version
                f.write(serialize_record(record))  # key=value lines, no trailing newline
        except OSError as e:  # Filesystem refused the write
            raise OutputWriteError(product_file, e) from e

        verbose_output(f"{BackgroundColors.GREEN}Created product file: {BackgroundColors.CYAN}{product_file}{Style.RESET_ALL}")
        return product_file


# Functions Definitions:


def serialize_record(record):
    """
    Serializes a product record as newline separated key=value lines.

    Fields follow PRODUCT_FIELDS; priceOld is left out when the product has no discount.

    :param record: ProductRecord
    :return: File content without a trailing newline
    """

    lines = []  # One "key=value" line per present field
    for key, attribute in PRODUCT_FIELDS:  # Fixed output order
        value = getattr(record, attribute)  # Field value from the record
        if value is None:  # Optional field not present on the page
            continue
        if attribute in DECIMAL_FIELDS:  # Prices and rating keep one fractional digit
            value = format_decimal(value)
        lines.append(f"{key}={value}")
    return "\n".join(lines)  # No trailing newline
