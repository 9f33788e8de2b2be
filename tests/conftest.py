"""Shared fixtures: the bundled public suffix snapshot and a tiny hand-written table."""
import pytest

from urlpat.suffixes import SuffixTable, load_snapshot

SMALL_RULES = [
    "com",
    "uk",
    "co.uk",
    "*.ck",
    "!www.ck",
    "jp",
    "*.kawasaki.jp",
    "!city.kawasaki.jp",
    "香港",
]


@pytest.fixture(scope="session")
def table():
    return load_snapshot()


@pytest.fixture(scope="session")
def private_table():
    return load_snapshot(include_private=True)


@pytest.fixture
def small_table():
    return SuffixTable(SMALL_RULES)
