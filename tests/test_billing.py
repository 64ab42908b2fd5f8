from datetime import date, datetime

import pytest

import config
from billing import BillingDraft, ConfigurationError, calculate_cost, rental_days
from catalog import CatalogEntry


def _entry(**overrides):
    fields = {
        "name": "Sentinel-2",
        "category": "Earth Observation",
        "image": "/images/sentinel2.png",
        "orbit_types": ["LEO", "SSO"],
        "cost_per_day": {"LEO": "100", "SSO": 120},
        "downlink_cost": {"base": "included", "high": "20"},
    }
    fields.update(overrides)
    return CatalogEntry(**fields)


def test_rental_days_is_inclusive():
    assert rental_days(date(2026, 1, 1), date(2026, 1, 1)) == 1
    assert rental_days(date(2026, 1, 1), date(2026, 1, 5)) == 5


def test_rental_days_floors_partial_days():
    start = datetime(2026, 1, 1, 0, 0)
    assert rental_days(start, datetime(2026, 1, 2, 23, 59)) == 2


def test_rental_days_rejects_reversed_range():
    with pytest.raises(ConfigurationError):
        rental_days(date(2026, 1, 5), date(2026, 1, 1))


def test_cost_example_leo_high_five_days():
    cost = calculate_cost(_entry(), "LEO", "High", date(2026, 3, 1), date(2026, 3, 5))
    assert cost == 600


def test_cost_scales_linearly_with_days():
    entry = _entry()
    one_day = calculate_cost(entry, "SSO", "High", date(2026, 3, 1), date(2026, 3, 1))
    ten_days = calculate_cost(entry, "SSO", "High", date(2026, 3, 1), date(2026, 3, 10))
    assert one_day == 140
    assert ten_days == 10 * one_day


def test_included_downlink_adds_nothing():
    assert calculate_cost(_entry(), "LEO", "Base", date(2026, 3, 1), date(2026, 3, 2)) == 200


def test_unknown_orbit_costs_nothing():
    assert calculate_cost(_entry(), "GEO", "High", date(2026, 3, 1), date(2026, 3, 2)) == 40


def test_missing_range_costs_nothing():
    assert calculate_cost(_entry(), "LEO", "High", None, date(2026, 3, 2)) == 0
    assert calculate_cost(None, "LEO", "High", date(2026, 3, 1), date(2026, 3, 2)) == 0


def test_draft_refuses_dates_before_selections():
    draft = BillingDraft(entry=_entry())
    draft.select_orbit("leo")

    assert draft.select_dates(date(2026, 3, 1), date(2026, 3, 5)) is False
    assert draft.error == config.MSG_SELECT_BEFORE_DATES
    assert draft.duration == 0
    assert draft.total_cost == 0


def test_draft_recomputes_on_every_selection():
    draft = BillingDraft(entry=_entry())
    draft.select_orbit("LEO")
    draft.select_downlink_rate("High")
    assert draft.select_dates(date(2026, 3, 1), date(2026, 3, 5))
    assert draft.duration == 5
    assert draft.total_cost == 600

    draft.select_orbit("SSO")
    assert draft.total_cost == 700
    draft.select_downlink_rate("Base")
    assert draft.total_cost == 600
    assert draft.error == ""


def test_draft_rejects_reversed_range():
    draft = BillingDraft(entry=_entry())
    draft.select_orbit("LEO")
    draft.select_downlink_rate("High")

    assert draft.select_dates(date(2026, 3, 5), date(2026, 3, 1)) is False
    assert draft.error
    assert draft.start is None and draft.end is None
    assert draft.duration == 0
    assert draft.total_cost == 0

    draft.select_dates(date(2026, 3, 1), date(2026, 3, 5))
    assert draft.select_dates(date(2026, 3, 9), date(2026, 3, 2)) is False
    assert (draft.start, draft.end) == (date(2026, 3, 1), date(2026, 3, 5))
    assert draft.total_cost == 600


def test_draft_selection_clears_error():
    draft = BillingDraft(entry=_entry())
    draft.select_dates(date(2026, 3, 1), date(2026, 3, 2))
    assert draft.error

    draft.select_orbit("LEO")
    assert draft.error == ""


def test_validate_names_missing_selection():
    draft = BillingDraft(entry=_entry())
    with pytest.raises(ConfigurationError, match="orbit"):
        draft.validate()

    draft.select_orbit("LEO")
    draft.select_downlink_rate("High")
    with pytest.raises(ConfigurationError, match="date range"):
        draft.validate()
