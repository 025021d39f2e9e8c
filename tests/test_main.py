import os

import pytest

import main
from product_models import ScrapeResult, ScrapeTarget
from scraper_errors import NoTargetsError, RegionNotFoundError


@pytest.fixture
def input_files(tmp_path):
    urls_file = tmp_path / "urls.txt"
    regions_file = tmp_path / "regions.txt"
    return urls_file, regions_file


@pytest.fixture
def fake_storefront(monkeypatch):
    class RecordingStorefront:
        scraped = []
        failing_urls = set()

        def __init__(self, target, **options):
            self.target = target
            self.options = options

        def scrape(self):
            RecordingStorefront.scraped.append(self.target)
            if self.target.url in RecordingStorefront.failing_urls:
                raise RegionNotFoundError(self.target.region, [])
            return ScrapeResult(record=None, product_directory=f"results/{self.target.url}")

    monkeypatch.setattr(main, "Storefront", RecordingStorefront)
    return RecordingStorefront


def test_load_targets_keeps_non_blank_lines_in_order(input_files):
    urls_file, regions_file = input_files
    urls_file.write_text("https://shop.example/a\n\n  https://shop.example/b  \n   \nhttps://shop.example/c\n")

    targets = main.load_targets(None, None, str(urls_file), str(regions_file))

    assert [target.url for target in targets] == [
        "https://shop.example/a",
        "https://shop.example/b",
        "https://shop.example/c",
    ]
    assert all(target.region is None for target in targets)


def test_load_targets_pairs_regions_by_line(input_files):
    urls_file, regions_file = input_files
    urls_file.write_text("https://shop.example/a\nhttps://shop.example/b\nhttps://shop.example/c\n")
    regions_file.write_text("Moscow\nSt. Petersburg\n")

    targets = main.load_targets(None, None, str(urls_file), str(regions_file))

    assert targets == [
        ScrapeTarget("https://shop.example/a", "Moscow"),
        ScrapeTarget("https://shop.example/b", "St. Petersburg"),
        ScrapeTarget("https://shop.example/c", None),
    ]


def test_url_argument_ignores_list_files(input_files):
    urls_file, regions_file = input_files
    urls_file.write_text("https://shop.example/a\n")
    regions_file.write_text("Moscow\n")

    targets = main.load_targets("https://shop.example/item-42", None, str(urls_file), str(regions_file))

    assert targets == [ScrapeTarget("https://shop.example/item-42", None)]


def test_url_and_region_arguments():
    targets = main.load_targets("https://shop.example/item-42", "Berlin", "missing.txt", "missing.txt")

    assert targets == [ScrapeTarget("https://shop.example/item-42", "Berlin")]


def test_region_argument_keeps_surrounding_whitespace():
    targets = main.load_targets("https://shop.example/item-42", " Berlin", "missing.txt", "missing.txt")

    assert targets == [ScrapeTarget("https://shop.example/item-42", " Berlin")]


def test_empty_region_argument_means_no_region():
    targets = main.load_targets("https://shop.example/item-42", "", "missing.txt", "missing.txt")

    assert targets[0].region is None


def test_missing_urls_file_raises_no_targets(input_files):
    urls_file, regions_file = input_files

    with pytest.raises(NoTargetsError):
        main.load_targets(None, None, str(urls_file), str(regions_file))


def test_blank_urls_file_raises_no_targets(input_files):
    urls_file, regions_file = input_files
    urls_file.write_text("\n   \n")

    with pytest.raises(NoTargetsError):
        main.load_targets(None, None, str(urls_file), str(regions_file))


def test_scrape_targets_stops_at_first_failure(fake_storefront):
    fake_storefront.failing_urls = {"https://shop.example/a"}
    targets = [ScrapeTarget("https://shop.example/a", "Berlin"), ScrapeTarget("https://shop.example/b")]

    with pytest.raises(RegionNotFoundError):
        main.scrape_targets(targets, {})

    assert fake_storefront.scraped == [targets[0]]


def test_scrape_targets_can_continue_after_failure(fake_storefront):
    fake_storefront.failing_urls = {"https://shop.example/a"}
    targets = [ScrapeTarget("https://shop.example/a", "Berlin"), ScrapeTarget("https://shop.example/b")]

    successful, failures = main.scrape_targets(targets, {}, continue_on_error=True)

    assert successful == 1
    assert [target for target, error in failures] == [targets[0]]
    assert fake_storefront.scraped == targets


def test_build_storefront_options_reads_settings():
    settings = dict(main.DEFAULT_SETTINGS, HEADLESS="false", VIEWPORT_HEIGHT="900", RESULTS_DIRECTORY="out")

    options = main.build_storefront_options(settings)

    assert options["headless"] is False
    assert options["viewport"] == {"width": 1920, "height": 900}
    assert options["output_directory"] == "out"
    assert options["page_load_timeout"] == 30000


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in main.DEFAULT_SETTINGS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_main_exits_zero_after_all_targets(workdir, fake_storefront):
    (workdir / "urls.txt").write_text("https://shop.example/item-42\n")
    (workdir / "regions.txt").write_text("Moscow\n")

    assert main.main([]) == 0
    assert fake_storefront.scraped == [ScrapeTarget("https://shop.example/item-42", "Moscow")]
    assert os.path.isdir(workdir / "results")
    assert os.path.isfile(workdir / "Logs" / "main.log")


def test_main_exits_one_without_targets(workdir, fake_storefront):
    assert main.main([]) == 1
    assert fake_storefront.scraped == []
    assert "NoTargetsError" in (workdir / "Logs" / "main.log").read_text(encoding="utf-8")


def test_main_exits_one_when_a_target_fails(workdir, fake_storefront):
    fake_storefront.failing_urls = {"https://shop.example/item-42"}

    assert main.main(["https://shop.example/item-42", "Atlantis"]) == 1


def test_main_continue_on_error_attempts_every_target(workdir, fake_storefront):
    fake_storefront.failing_urls = {"https://shop.example/a"}
    (workdir / "urls.txt").write_text("https://shop.example/a\nhttps://shop.example/b\n")

    assert main.main(["--continue-on-error"]) == 1
    assert [target.url for target in fake_storefront.scraped] == ["https://shop.example/a", "https://shop.example/b"]
