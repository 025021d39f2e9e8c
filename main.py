"""
================================================================================
Storefront Region Scraper
================================================================================
Author      : Breno Farias da Silva
Created     : <2026-10-14>
Description :
    This script scrapes product listings (name, price, old price, rating and
    review count) from storefront product pages, optionally switching the
    storefront to a given region first, and saves a full page screenshot and
    a key=value product file per region and product.

    Key features include:
        - URLs from the command line or from urls.txt (one per line)
        - Optional regions from the command line or from regions.txt, paired with the URLs by line
        - One headless browser session per product, always closed
        - Fail-fast by default, or per-product isolation with --continue-on-error
        - Logging to both the terminal and ./Logs/main.log

Usage:
    1. Optionally configure the .env file (HEADLESS, PAGE_LOAD_TIMEOUT, ...).
    2. Either pass a URL (and a region) on the command line:
            $ python main.py https://shop.example/item-42 Moscow
       or list the URLs in urls.txt and the regions in regions.txt and run:
            $ python main.py
    3. Verify the outputs in the ./results/{Region}/{Product}/ directories.

Outputs:
    - results/{Region}/{Product}/screenshot.jpg
    - results/{Region}/{Product}/product.txt
    - Logs in ./Logs/ for execution details

Dependencies:
    - Python >= 3.8
    - playwright for browser automation
    - beautifulsoup4 for HTML parsing
    - colorama for terminal coloring
    - python-dotenv for environment variables
    - tqdm for the progress bar

Assumptions & Notes:
    - Websites' structures may change; selectors live in store_selectors.py
    - Products are scraped one after another, never in parallel
    - A product scraped twice overwrites its previous files
"""

import argparse  # For parsing command line arguments
import datetime  # For getting the current date and time
import os  # For reading environment variables
import sys  # For system-specific parameters and functions
from colorama import Style  # For coloring the terminal
from dotenv import load_dotenv  # For loading environment variables
from Logger import Logger  # For logging output to both terminal and file
from pathlib import Path  # For handling file paths
from playwright.sync_api import Error as PlaywrightError  # Browser failures isolated in continue-on-error mode
from product_models import ScrapeTarget  # Input record type
from product_utils import BackgroundColors, create_directory, verbose_output  # Shared helpers
import product_utils  # For switching verbose output on from the command line
from scraper_errors import NoTargetsError, ScraperError  # Structured failure types
from Storefront import Storefront  # Per-product browser session
from store_selectors import DEFAULT_SELECTORS  # Default selector table
from tqdm import tqdm  # Progress bar for URL processing


# File Path Constants:
URLS_FILE = "./urls.txt"  # One product URL per line
REGIONS_FILE = "./regions.txt"  # One region per line, paired with URLS_FILE by line index
RESULTS_DIRECTORY = "./results"  # Base directory of the results tree
LOG_FILE = f"./Logs/{Path(__file__).stem}.log"  # Log file of the run

# Environment Variables:
ENV_PATH = "./.env"  # The path to the .env file

# Default Settings (overridden by the .env file and then by the command line):
DEFAULT_SETTINGS = {
    "HEADLESS": "True",
    "PAGE_LOAD_TIMEOUT": "30000",
    "NAVIGATION_TIMEOUT": "30000",
    "VIEWPORT_WIDTH": "1920",
    "VIEWPORT_HEIGHT": "800",
    "RESULTS_DIRECTORY": RESULTS_DIRECTORY,
    "CONTINUE_ON_ERROR": "False",
    "VERBOSE": "False",
}


# Functions Definitions:


def verify_filepath_exists(filepath):
    """
    Verify if a file or folder exists at the specified path.

    :param filepath: Path to the file or folder
    :return: True if the file or folder exists, False otherwise
    """

    verbose_output(
        f"{BackgroundColors.GREEN}Verifying if the file or folder exists at the path: {BackgroundColors.CYAN}{filepath}{Style.RESET_ALL}"
    )  # Output the verbose message

    return os.path.exists(filepath)  # Return True if the file or folder exists, False otherwise


def read_lines(filepath):
    """
    Reads the non-blank lines of a text file, trimmed, in file order.

    :param filepath: Path to the text file
    :return: List of lines, or None if the file does not exist
    """

    if not verify_filepath_exists(filepath):  # Missing file is not an error here
        return None

    with open(filepath, "r", encoding="utf-8") as fh:  # Open the file with UTF-8 encoding
        return [line.strip() for line in fh if line.strip()]  # Keep non-blank lines without surrounding whitespace


def load_targets(url_argument=None, region_argument=None, urls_file=URLS_FILE, regions_file=REGIONS_FILE):
    """
    Determine and return the list of scrape targets.

    Priority:
        1) A URL given on the command line is the only target, with the region argument if given.
        2) Otherwise one URL per non-blank line of `urls_file`, each paired with the line
           of `regions_file` at the same index (no region when that file is missing or shorter).

    :param url_argument: URL from the command line, or None
    :param region_argument: Region from the command line, or None
    :param urls_file: Path of the URLs file
    :param regions_file: Path of the regions file
    :return: List of ScrapeTarget
    :raises NoTargetsError: If no URL was found
    """

    if url_argument and url_argument.strip():  # Command line wins, list files are ignored
        return [ScrapeTarget(url=url_argument.strip(), region=region_argument or None)]  # Region is matched exactly, whitespace included

    urls = read_lines(urls_file)
    if urls is None:  # If the input file does not exist
        print(f"{BackgroundColors.YELLOW}Input file not found: {BackgroundColors.CYAN}{urls_file}{Style.RESET_ALL}")
        urls = []

    if not urls:  # Nothing to scrape, stop before any browser is launched
        raise NoTargetsError(urls_file)

    regions = read_lines(regions_file) or []  # Regions file is optional
    if len(regions) > len(urls):  # Extra regions have no URL to pair with
        verbose_output(
            f"{BackgroundColors.YELLOW}Ignoring {len(regions) - len(urls)} region(s) without a matching URL in {BackgroundColors.CYAN}{regions_file}{Style.RESET_ALL}"
        )

    return [
        ScrapeTarget(url=url, region=regions[index] if index < len(regions) else None)
        for index, url in enumerate(urls)
    ]


def env_flag(settings, name):
    """
    Interprets a setting as a boolean ("true", "1" or "yes" are true).

    :param settings: Dictionary of raw setting strings
    :param name: Setting name
    :return: Boolean value
    """

    return str(settings[name]).strip().lower() in ("true", "1", "yes")


def load_settings(env_path=ENV_PATH):
    """
    Loads the run settings from the .env file and the environment.

    :param env_path: The path to the .env file
    :return: Dictionary with the raw setting strings
    """

    if verify_filepath_exists(env_path):  # The .env file is optional
        load_dotenv(env_path)  # Load environment variables
    else:
        verbose_output(f"{BackgroundColors.YELLOW}No {BackgroundColors.CYAN}.env{BackgroundColors.YELLOW} file found, using defaults.{Style.RESET_ALL}")

    return {name: os.getenv(name, default) for name, default in DEFAULT_SETTINGS.items()}  # Environment overrides defaults


def parse_arguments(argv=None):
    """
    Parses the command line.

    :param argv: Argument list (defaults to sys.argv[1:])
    :return: argparse.Namespace
    """

    parser = argparse.ArgumentParser(description="Scrape storefront product pages, optionally in a given region.")
    parser.add_argument("url", nargs="?", help="Product URL to scrape (urls.txt is ignored when given)")
    parser.add_argument("region", nargs="?", help="Region to select before scraping the URL")
    parser.add_argument("--urls-file", default=URLS_FILE, help="File with one product URL per line")
    parser.add_argument("--regions-file", default=REGIONS_FILE, help="File with one region per line, paired with the URLs by line")
    parser.add_argument("--results-dir", default=None, help="Base directory of the results tree")
    parser.add_argument("--continue-on-error", action="store_true", default=None, help="Keep going when a product fails")
    parser.add_argument("--verbose", action="store_true", default=None, help="Output verbose messages")
    return parser.parse_args(argv)


def build_storefront_options(settings):
    """
    Converts raw settings into Storefront keyword arguments.

    :param settings: Dictionary with the raw setting strings
    :return: Dictionary of Storefront keyword arguments
    """

    return {
        "selectors": DEFAULT_SELECTORS,
        "output_directory": settings["RESULTS_DIRECTORY"],
        "headless": env_flag(settings, "HEADLESS"),
        "viewport": {"width": int(settings["VIEWPORT_WIDTH"]), "height": int(settings["VIEWPORT_HEIGHT"])},
        "page_load_timeout": int(settings["PAGE_LOAD_TIMEOUT"]),
        "navigation_timeout": int(settings["NAVIGATION_TIMEOUT"]),
    }


def scrape_targets(targets, storefront_options, continue_on_error=False):
    """
    Scrapes every target in order, one browser session at a time.

    :param targets: List of ScrapeTarget
    :param storefront_options: Keyword arguments for Storefront
    :param continue_on_error: When True, a failing target is reported and skipped instead of stopping the run
    :return: Tuple (number of successful targets, list of (target, error) failures)
    """

    successful_scrapes = 0  # Counter for successful operations
    failures = []  # (target, error) pairs in continue-on-error mode
    total_targets = len(targets)  # Total number of targets to process

    with tqdm(
        targets,
        desc=f"{BackgroundColors.GREEN}Processing URLs{Style.RESET_ALL}",
        unit="url",
        ncols=100,
        bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}, {rate_fmt}]",
        file=sys.__stdout__,
    ) as pbar:  # Progress bar is closed even when a target stops the run
        for index, target in enumerate(pbar, 1):  # Iterate through all targets
            pbar.set_description(
                f"{BackgroundColors.GREEN}Parsing page {BackgroundColors.CYAN}{index}{BackgroundColors.GREEN} from {BackgroundColors.CYAN}{total_targets}{Style.RESET_ALL}"
            )  # Update the progress bar description

            try:
                result = Storefront(target, **storefront_options).scrape()  # Browser is closed inside scrape()
            except (ScraperError, PlaywrightError) as e:
                if not continue_on_error:  # Fail-fast: the first failure ends the run
                    raise
                print(f"{BackgroundColors.RED}Skipping {BackgroundColors.CYAN}{target.url}{BackgroundColors.RED}: {e}{Style.RESET_ALL}\n")
                failures.append((target, e))
                continue

            successful_scrapes += 1
            verbose_output(f"{BackgroundColors.GREEN}Saved {BackgroundColors.CYAN}{result.product_directory}{Style.RESET_ALL}")

    return successful_scrapes, failures


def calculate_execution_time(start_time, finish_time):
    """
    Calculates the execution time and returns a human-readable string like "1h 2m 3s".

    :param start_time: Start datetime
    :param finish_time: Finish datetime
    :return: Formatted duration string
    """

    total_seconds = abs((finish_time - start_time).total_seconds())  # Normalize negative durations

    hours = int(total_seconds // 3600)  # Compute full hours
    minutes = int((total_seconds % 3600) // 60)  # Compute remaining minutes
    seconds = int(total_seconds % 60)  # Compute remaining seconds

    if hours > 0:  # Include hours when present
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:  # Include minutes when present
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def main(argv=None):
    """
    Main function.

    :param argv: Argument list (defaults to sys.argv[1:])
    :return: Process exit status (0 on success, 1 on failure)
    """

    original_stdout, original_stderr = sys.stdout, sys.stderr  # Streams to restore when the run ends
    logger = Logger(LOG_FILE, clean=True)  # Create a Logger instance
    sys.stdout = logger  # Redirect stdout to the logger
    sys.stderr = logger  # Redirect stderr to the logger

    try:
        return run(argv)
    finally:
        sys.stdout, sys.stderr = original_stdout, original_stderr
        logger.close()


def run(argv=None):
    """
    Loads the settings and the targets and scrapes them.

    :param argv: Argument list (defaults to sys.argv[1:])
    :return: Process exit status
    """

    print(
        f"{BackgroundColors.BOLD}{BackgroundColors.GREEN}Welcome to the {BackgroundColors.CYAN}Storefront Region Scraper{BackgroundColors.GREEN} program!{Style.RESET_ALL}"
    )  # Output the welcome message
    start_time = datetime.datetime.now()  # Get the start time of the program

    args = parse_arguments(argv)
    settings = load_settings()

    if args.results_dir:  # Command line overrides the environment
        settings["RESULTS_DIRECTORY"] = args.results_dir
    if args.continue_on_error:
        settings["CONTINUE_ON_ERROR"] = "True"
    if args.verbose:
        settings["VERBOSE"] = "True"
    product_utils.VERBOSE = env_flag(settings, "VERBOSE")

    try:
        create_directory(os.path.abspath(settings["RESULTS_DIRECTORY"]), settings["RESULTS_DIRECTORY"])  # Create the base results directory
        targets = load_targets(args.url, args.region, args.urls_file, args.regions_file)
        successful_scrapes, failures = scrape_targets(
            targets, build_storefront_options(settings), continue_on_error=env_flag(settings, "CONTINUE_ON_ERROR")
        )
    except Exception as e:  # Any failure that reaches here ends the run
        print(f"{BackgroundColors.RED}{type(e).__name__}: {e}{Style.RESET_ALL}")
        return 1

    print(
        f"{BackgroundColors.GREEN}Successfully processed: {BackgroundColors.CYAN}{successful_scrapes}/{len(targets)}{BackgroundColors.GREEN} URLs{Style.RESET_ALL}"
    )  # Output the number of successful operations

    finish_time = datetime.datetime.now()  # Get the finish time of the program
    print(
        f"{BackgroundColors.GREEN}Execution time: {BackgroundColors.CYAN}{calculate_execution_time(start_time, finish_time)}{Style.RESET_ALL}"
    )
    print(f"{BackgroundColors.BOLD}{BackgroundColors.GREEN}Parsing done.{Style.RESET_ALL}")

    return 1 if failures else 0


if __name__ == "__main__":
    """
    This is the standard boilerplate that calls the main() function.

    :return: None
    """

    sys.exit(main())  # Call the main function
