"""
product_utils.py - Shared helpers for naming, parsing and terminal output

Author      : Breno Farias da Silva
Created     : 2026-02-16
Description :
    Small utility module that is the single source-of-truth for the pieces
    every other module of the scraper needs:

    - `BackgroundColors` and `verbose_output` for terminal messages.
    - `create_directory` for idempotent creation of the results tree.
    - `sanitize_region_dir_name` and `url_tail`, which turn a region name and
    a product URL into the two path segments of a product output directory.
    - `parse_decimal`, `parse_integer` and `format_decimal` for the numeric
    text the product page exposes.

Usage:
    from product_utils import sanitize_region_dir_name, parse_decimal
    region_dir = sanitize_region_dir_name("St. Petersburg")  # "St__Petersburg"
    price = parse_decimal("1,234")  # 1.234

Dependencies:
    - colorama
"""


import os  # For creating directories
import re  # For matching the numeric prefix of scraped text
from colorama import Style  # For coloring the terminal
from scraper_errors import OutputWriteError, ValueParseError  # Structured failure types
from urllib.parse import urlparse  # For extracting the URL path


# Macros:
class BackgroundColors:  # Colors for the terminal
    CYAN = "\033[96m"  # Cyan
    GREEN = "\033[92m"  # Green
    YELLOW = "\033[93m"  # Yellow
    RED = "\033[91m"  # Red
    BOLD = "\033[1m"  # Bold
    UNDERLINE = "\033[4m"  # Underline
    CLEAR_TERMINAL = "\033[H\033[J"  # Clear the terminal


# Execution Constants:
VERBOSE = os.getenv("VERBOSE", "False").lower() == "true"  # Set to True to output verbose messages

DECIMAL_PREFIX_PATTERN = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")  # Leading float, like JavaScript parseFloat
INTEGER_PREFIX_PATTERN = re.compile(r"^\s*([-+]?\d+)")  # Leading integer, like JavaScript parseInt
REGION_DIR_REPLACEMENTS = (".", " ")  # Characters replaced by "_" in region directory names


# Functions Definitions:


def verbose_output(true_string="", false_string=""):
    """
    Outputs a message if the VERBOSE constant is set to True.

    :param true_string: The string to be outputted if the VERBOSE constant is set to True.
    :param false_string: The string to be outputted if the VERBOSE constant is set to False.
    :return: None
    """

    if VERBOSE and true_string != "":  # If VERBOSE is True and a true_string was provided
        print(true_string)  # Output the true statement string
    elif false_string != "":  # If a false_string was provided
        print(false_string)  # Output the false statement string


def create_directory(full_directory_name, relative_directory_name):
    """
    Creates a directory and any missing parent directories.

    :param full_directory_name: Name of the directory to be created.
    :param relative_directory_name: Relative name of the directory to be created that will be shown in the terminal.
    :return: None
    :raises OutputWriteError: If the directory cannot be created.
    """

    verbose_output(
        true_string=f"{BackgroundColors.GREEN}Creating the {BackgroundColors.CYAN}{relative_directory_name}{BackgroundColors.GREEN} directory...{Style.RESET_ALL}"
    )

    if os.path.isdir(full_directory_name):  # Verify if the directory already exists
        return  # Return if the directory already exists
    try:  # Try to create the directory
        os.makedirs(full_directory_name, exist_ok=True)  # Create the directory with its parents
    except OSError as e:  # If the directory cannot be created
        print(
            f"{BackgroundColors.RED}The creation of the {BackgroundColors.CYAN}{relative_directory_name}{BackgroundColors.RED} directory failed.{Style.RESET_ALL}"
        )
        raise OutputWriteError(full_directory_name, e) from e


def sanitize_region_dir_name(region):
    """
    Turns a region name into a directory name by replacing periods and spaces with underscores.

    Each character is replaced on its own, so "St. Petersburg" becomes "St__Petersburg".

    :param region: The region name as shown on the page
    :return: Directory-safe region name
    """

    for character in REGION_DIR_REPLACEMENTS:  # Replace each character independently
        region = region.replace(character, "_")
    return region


def url_tail(url):
    """
    Returns the last non-empty path segment of a URL, used as the product directory name.

    :param url: The product URL
    :return: Last path segment, or the host name when the URL has no path
    """

    parsed = urlparse(url)  # Split the URL so query strings and fragments are ignored
    segments = [segment for segment in parsed.path.split("/") if segment]  # Drop empty segments from trailing slashes
    if segments:  # If the URL has at least one path segment
        return segments[-1]  # Use the last one
    return parsed.netloc or url  # Fall back to the host name for bare domains


def parse_decimal(text, field="value", comma_decimal=True):
    """
    Parses the numeric prefix of scraped text, like JavaScript parseFloat.

    With comma_decimal every comma is read as a decimal point first:
    "1,234" -> 1.234, "99" -> 99.0, "89,99 ₽" -> 89.99
    Without it the text is parsed as is, so "4,8" -> 4.0.

    :param text: Raw text read from the page
    :param field: Field name used in the error message
    :param comma_decimal: Whether commas are decimal separators in this text
    :return: Parsed float
    :raises ValueParseError: If the text does not start with a number
    """

    normalized = str(text).strip()  # Surrounding whitespace is never part of the number
    if comma_decimal:  # Prices on the storefront use commas as decimal separators
        normalized = normalized.replace(",", ".")
    match = DECIMAL_PREFIX_PATTERN.match(normalized)  # Leading number only, trailing currency is ignored
    if not match:  # Nothing numeric at the start of the text
        raise ValueParseError(field, text)
    return float(match.group(1))


def parse_integer(text, field="value"):
    """
    Parses the integer prefix of scraped text.

    :param text: Raw text read from the page
    :param field: Field name used in the error message
    :return: Parsed int
    :raises ValueParseError: If the text does not start with an integer
    """

    match = INTEGER_PREFIX_PATTERN.match(str(text))
    if not match:
        raise ValueParseError(field, text)
    return int(match.group(1))


def format_decimal(value):
    """
    Formats a number with exactly one fractional digit (19 -> "19.0").

    :param value: The number to format
    :return: Formatted string
    """

    return f"{value:.1f}"
