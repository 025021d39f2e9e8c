"""
scraper_errors.py - Exception types raised by the storefront scraper

Author      : Breno Farias da Silva
Created     : 2026-10-12
Description :
    Every failure the scraper knows how to name derives from `ScraperError`,
    so the run loop in main.py can tell an expected scraping failure apart
    from a bug. Each exception keeps the context needed to report it
    (requested region, selector name, file path) as attributes.
"""


class ScraperError(Exception):
    """
    Base class for all scraper failures.
    """


class NoTargetsError(ScraperError):
    """
    Raised when neither the command line nor the URLs file provided any URL.
    """

    def __init__(self, urls_file=None):
        """
        :param urls_file: Path of the URLs file that was consulted (None when not consulted)
        :return: None
        """

        self.urls_file = urls_file  # Keep the consulted file for the error report
        super().__init__(
            "No URL to parse. Specify the url as the first argument when starting the program "
            f"or the list of urls in the {urls_file or 'urls.txt'} file separated by newline."
        )


class RegionNotFoundError(ScraperError):
    """
    Raised when the requested region is not in the region modal list.
    """

    def __init__(self, region, available_regions=None):
        """
        :param region: The region name that was requested
        :param available_regions: The trimmed region names that were rendered in the modal
        :return: None
        """

        self.region = region  # The requested region name
        self.available_regions = list(available_regions or [])  # Regions the page offered instead
        super().__init__(f'Region "{region}" not found. Parser stopped.')


class MissingElementError(ScraperError):
    """
    Raised when a required selector yields no element on the page.
    """

    def __init__(self, selector_name, selector):
        """
        :param selector_name: Field name of the selector in StoreSelectors
        :param selector: The CSS selector that matched nothing
        :return: None
        """

        self.selector_name = selector_name
        self.selector = selector
        super().__init__(f'Required element "{selector_name}" not found (selector: {selector}).')


class ValueParseError(ScraperError):
    """
    Raised when a numeric field does not start with a number.
    """

    def __init__(self, field, raw_value):
        self.field = field
        self.raw_value = raw_value
        super().__init__(f'Could not parse "{field}" from value {raw_value!r}.')


class OutputWriteError(ScraperError):
    """
    Raised when the results tree cannot be created or written.
    """

    def __init__(self, path, cause):
        """
        :param path: The file or directory path that failed
        :param cause: The underlying OSError
        :return: None
        """

        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")
