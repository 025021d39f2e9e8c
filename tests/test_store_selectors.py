import dataclasses

import pytest

from store_selectors import DEFAULT_SELECTORS, StoreSelectors


def test_selector_table_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SELECTORS.price = ".price"


def test_overriding_one_selector_keeps_the_others():
    selectors = StoreSelectors(price=".price")

    assert selectors.price == ".price"
    assert selectors.region_link == DEFAULT_SELECTORS.region_link
    assert selectors.old_price == DEFAULT_SELECTORS.old_price
