"""Shared fixtures."""

from datetime import date, timedelta

import pytest

from periodhub.services.storage import JournalStorage
from periodhub.utils.config import Settings, get_settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path,
        progress_max_entries=5,
        pain_max_records=10,
        symptom_max_entries=10,
        _env_file=None,
    )


@pytest.fixture
def storage(settings):
    with JournalStorage(settings) as s:
        yield s


@pytest.fixture
def data_env(tmp_path, monkeypatch):
    """Point the cached settings at a temporary data directory."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("EMAIL_API_URL", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def past_day():
    """A date safely in the past, so time-of-day checks never trip."""
    return date.today() - timedelta(days=3)
