"""Shared fixtures: a fixed evaluation date and a clean fixing store per test."""

from datetime import date

import pytest

from valuation.fixings import default_fixing_store
from valuation.settings import SavedSettings

TODAY = date(2024, 1, 15)  # a Monday


@pytest.fixture(autouse=True)
def evaluation_settings():
    """Pin the evaluation date and restore global settings afterwards."""
    with SavedSettings() as settings:
        settings.evaluation_date = TODAY
        settings.enforces_todays_historic_fixings = False
        yield settings
    default_fixing_store().clear_histories()


@pytest.fixture
def today() -> date:
    return TODAY
