import pytest

from fakes import PRODUCT_HTML, FakePage
from product_extractor import ProductExtractor
from scraper_errors import MissingElementError, ValueParseError
from store_selectors import StoreSelectors

URL = "https://shop.example/item-42"


@pytest.fixture
def extractor():
    return ProductExtractor()


def test_extracts_all_fields(extractor):
    record = extractor.extract_from_html(PRODUCT_HTML, "Moscow", URL)

    assert record.name == "Milk 3.2% 1 l"
    assert record.region == "Moscow"
    assert record.price == pytest.approx(89.99)
    assert record.price_old == pytest.approx(109.5)
    assert record.rating == pytest.approx(4.8)
    assert record.review_count == 128
    assert record.url == URL


def test_extract_reads_the_live_page_content(extractor):
    record = extractor.extract(FakePage(), "Berlin", URL)

    assert record.region == "Berlin"
    assert record.name == "Milk 3.2% 1 l"


def test_old_price_is_optional(extractor):
    html = PRODUCT_HTML.replace('class="BuyQuant_oldPrice__z7"', 'class="Something_else"')

    record = extractor.extract_from_html(html, "Moscow", URL)

    assert record.price_old is None


@pytest.mark.parametrize("old_price_text", ["", "   ", "sale", "0", "0,00 &#8381;"])
def test_empty_non_numeric_or_zero_old_price_means_no_discount(extractor, old_price_text):
    html = PRODUCT_HTML.replace("109,50 &#8381;", old_price_text)

    record = extractor.extract_from_html(html, "Moscow", URL)

    assert record.price_old is None
    assert record.price == pytest.approx(89.99)


def test_rating_comma_is_not_a_decimal_point(extractor):
    html = PRODUCT_HTML.replace('content="4.8"', 'content="4,8"')

    record = extractor.extract_from_html(html, "Moscow", URL)

    assert record.rating == pytest.approx(4.0)


@pytest.mark.parametrize(
    "removed, selector_name",
    [
        ('class="Title_title__x9 Title_big"', "name"),
        ('class="Price_priceDesktop__q1"', "price"),
        ('itemprop="ratingCount"', "rating_count"),
        ('itemprop="reviewCount"', "review_count"),
    ],
)
def test_missing_required_element(extractor, removed, selector_name):
    html = PRODUCT_HTML.replace(removed, "")

    with pytest.raises(MissingElementError) as excinfo:
        extractor.extract_from_html(html, "Moscow", URL)

    assert excinfo.value.selector_name == selector_name


def test_price_with_thousands_comma_is_read_as_decimal(extractor):
    html = PRODUCT_HTML.replace("89,99 &#8381;", "1,234")

    record = extractor.extract_from_html(html, "Moscow", URL)

    assert record.price == pytest.approx(1.234)


def test_unparsable_price(extractor):
    html = PRODUCT_HTML.replace("89,99 &#8381;", "Out of stock")

    with pytest.raises(ValueParseError) as excinfo:
        extractor.extract_from_html(html, "Moscow", URL)

    assert excinfo.value.field == "price"


def test_injected_selectors_are_used():
    selectors = StoreSelectors(name="h2.product-name")
    html = PRODUCT_HTML.replace(
        '<h1 class="Title_title__x9 Title_big">  Milk 3.2% 1 l  </h1>',
        '<h2 class="product-name">Milk 3.2% 1 l</h2>',
    )

    record = ProductExtractor(selectors).extract_from_html(html, "Moscow", URL)

    assert record.name == "Milk 3.2% 1 l"
