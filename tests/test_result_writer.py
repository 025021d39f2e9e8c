import os

from fakes import PRODUCT_HTML, FakePage, read_text
from product_extractor import ProductExtractor
from product_models import ProductRecord
from result_writer import ResultWriter, serialize_record

URL = "https://shop.example/item-42"


def make_record(**overrides):
    fields = dict(name="Milk 3.2% 1 l", region="Moscow", price=89.99, rating=4.8, review_count=128, url=URL)
    fields.update(overrides)
    return ProductRecord(**fields)


def test_serialize_record_uses_declared_field_order():
    content = serialize_record(make_record(price=19, price_old=25))

    assert content.split("\n") == [
        "name=Milk 3.2% 1 l",
        "region=Moscow",
        "price=19.0",
        "rating=4.8",
        "reviewCount=128",
        f"url={URL}",
        "priceOld=25.0",
    ]


def test_serialize_record_omits_missing_old_price():
    content = serialize_record(make_record())

    assert "priceOld" not in content
    assert not content.endswith("\n")


def test_zero_old_price_on_the_page_is_not_written(tmp_path):
    html = PRODUCT_HTML.replace("109,50 &#8381;", "0")
    record = ProductExtractor().extract_from_html(html, "Moscow", URL)
    writer = ResultWriter(str(tmp_path / "results"))

    product_dir = writer.write(FakePage(html=html), record)

    assert "priceOld" not in read_text(product_dir, "product.txt")


def test_product_directory_sanitizes_region(tmp_path):
    writer = ResultWriter(str(tmp_path))

    directory = writer.product_directory(make_record(region="St. Petersburg"))

    assert directory == os.path.join(str(tmp_path), "St__Petersburg", "item-42")


def test_write_saves_screenshot_and_product_file(tmp_path):
    page = FakePage()
    writer = ResultWriter(str(tmp_path / "results"))

    product_dir = writer.write(page, make_record())

    assert sorted(os.listdir(product_dir)) == ["product.txt", "screenshot.jpg"]
    assert page.screenshots == [(os.path.join(product_dir, "screenshot.jpg"), True)]
    assert "region=Moscow" in read_text(product_dir, "product.txt")


def test_writing_twice_overwrites(tmp_path):
    writer = ResultWriter(str(tmp_path / "results"))

    writer.write(FakePage(), make_record(price=10))
    product_dir = writer.write(FakePage(), make_record(price=12.5))

    assert sorted(os.listdir(product_dir)) == ["product.txt", "screenshot.jpg"]
    assert "price=12.5" in read_text(product_dir, "product.txt")
    assert "price=10.0" not in read_text(product_dir, "product.txt")
