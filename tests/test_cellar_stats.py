import uuid
from datetime import date

import pytest

from app.domains.bottles.entities import Bottle
from app.domains.bottles.stats import compute_cellar_stats, normalize_status

OWNER = uuid.uuid4()


def bottle(**fields):
    return Bottle.create_bottle(owner_id=OWNER, product=fields.pop("product", "Wine"), **fields)


@pytest.mark.parametrize("raw, expected", [
    ("in-cellar", "in-cellar"),
    ("In Cellar", "in-cellar"),
    ("IN_CELLAR", "in-cellar"),
    ("Pending", "pending"),
    ("drunk", "consumed"),
    ("gifted", None),
    ("", None),
    (None, None),
])
def test_normalize_status(raw, expected):
    assert normalize_status(raw) == expected


def test_empty_cellar():
    stats = compute_cellar_stats([], ready_to_drink_years=5)

    assert stats.wine_purchased == 0
    assert stats.total_value == 0.0


def test_ready_to_drink_uses_vintage_age():
    bottles = [
        bottle(vintage=2015, count=2, status="in-cellar"),
        bottle(vintage=2020, count=4, status="in-cellar"),
        bottle(vintage=2010, count=1, status="consumed"),
        bottle(count=5, status="in-cellar"),
    ]

    stats = compute_cellar_stats(bottles, ready_to_drink_years=5, today=date(2024, 6, 1))

    assert stats.ready_to_drink == 2
    assert stats.wine_in_cellar == 11


def test_total_value_prefers_price_over_cost():
    bottles = [
        bottle(count=2, price=30.5, cost_per_bottle=10, status="in-cellar"),
        bottle(count=3, cost_per_bottle=12.25, status="in-cellar"),
        bottle(count=10, price=100, status="pending"),
    ]

    stats = compute_cellar_stats(bottles, ready_to_drink_years=5)

    assert stats.total_value == 97.75


def test_unknown_status_counts_as_purchased_only():
    stats = compute_cellar_stats([bottle(count=4, status="gifted")], ready_to_drink_years=5)

    assert stats.wine_purchased == 4
    assert stats.wine_in_cellar == stats.wine_pending == stats.wine_consumed == 0


def test_zero_count_is_not_defaulted():
    stats = compute_cellar_stats([bottle(count=0, status="in-cellar")], ready_to_drink_years=5)

    assert stats.wine_in_cellar == 0
