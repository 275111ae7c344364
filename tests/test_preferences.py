"""Tests for the layered preference store and the preference service."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from elpris.config import PreferenceConfig
from elpris.exceptions import PreferenceStorageError
from elpris.repositories import (
    CacheStorageBackend,
    CookieBackend,
    LocalStorageBackend,
    PreferenceStore,
    create_preference_store,
)
from elpris.services import PreferenceService


class FailingBackend(LocalStorageBackend):
    name = "failing"

    def __init__(self):
        super().__init__("/nonexistent")

    def get(self, key):
        raise PreferenceStorageError("storage disabled")

    def set(self, key, value):
        raise PreferenceStorageError("storage disabled")


@pytest.fixture
def store(tmp_path) -> PreferenceStore:
    return create_preference_store(config=PreferenceConfig(), storage_dir=str(tmp_path))


class TestBackends:
    """Tests for the individual backends."""

    def test_local_storage_round_trip(self, tmp_path) -> None:
        path = tmp_path / "prefs" / "local_storage.json"
        backend = LocalStorageBackend(str(path))

        assert backend.get("selectedRegion") is None
        backend.set("selectedRegion", "SE1")
        backend.set("preferred-theme", "dark")

        assert backend.get("selectedRegion") == "SE1"
        assert json.loads(path.read_text()) == {"selectedRegion": "SE1", "preferred-theme": "dark"}

    def test_local_storage_corrupt_file(self, tmp_path) -> None:
        path = tmp_path / "local_storage.json"
        path.write_text("{not json")

        with pytest.raises(PreferenceStorageError):
            LocalStorageBackend(str(path)).get("selectedRegion")

    def test_cookie_backend_sets_response_cookie(self) -> None:
        response = MagicMock()
        backend = CookieBackend({"selectedRegion": "SE2"}, response, max_age_days=365)

        assert backend.get("selectedRegion") == "SE2"
        backend.set("preferred-theme", "light")

        assert backend.get("preferred-theme") == "light"
        response.set_cookie.assert_called_once_with("preferred-theme", "light", max_age=31536000, path="/")

    def test_cookie_backend_without_response(self) -> None:
        backend = CookieBackend()

        backend.set("selectedRegion", "SE4")

        assert backend.get("selectedRegion") == "SE4"

    def test_cache_storage_is_seeded(self, tmp_path) -> None:
        db_path = str(tmp_path / "cache.db")
        backend = CacheStorageBackend(db_path, defaults={"selectedRegion": "SE3"})

        assert backend.get("selectedRegion") == "SE3"
        backend.set("selectedRegion", "SE1")

        # Seeding never overwrites a stored value
        assert CacheStorageBackend(db_path, defaults={"selectedRegion": "SE3"}).get("selectedRegion") == "SE1"


class TestPreferenceStore:
    """Tests for ordered reads and fan-out writes."""

    def test_default_stack_order(self, store) -> None:
        assert [b.name for b in store.backends] == ["local_storage", "cookie", "cache_storage"]

    def test_fresh_store_falls_through_to_seeded_region(self, store) -> None:
        assert store.get("selectedRegion") == "SE3"
        assert store.get("preferred-theme") is None

    def test_first_backend_wins(self, tmp_path) -> None:
        store = create_preference_store(cookies={"selectedRegion": "SE2"}, config=PreferenceConfig(),
                                        storage_dir=str(tmp_path))

        assert store.get("selectedRegion") == "SE2"

        store.backends[0].set("selectedRegion", "SE4")

        assert store.get("selectedRegion") == "SE4"

    def test_invalid_values_are_skipped(self, tmp_path) -> None:
        store = create_preference_store(cookies={"selectedRegion": "SE9"}, config=PreferenceConfig(),
                                        storage_dir=str(tmp_path))

        assert store.get("selectedRegion", ["SE1", "SE2", "SE3", "SE4"]) == "SE3"

    def test_failing_backend_is_skipped(self) -> None:
        store = PreferenceStore([FailingBackend(), CookieBackend({"selectedRegion": "SE1"})])

        assert store.get("selectedRegion") == "SE1"
        assert store.set("selectedRegion", "SE2") == 1

    def test_set_writes_every_backend(self, store) -> None:
        assert store.set("preferred-theme", "dark") == 3

        assert all(backend.get("preferred-theme") == "dark" for backend in store.backends)


class TestPreferenceService:
    """Tests for PreferenceService."""

    def test_defaults(self, store) -> None:
        service = PreferenceService(repository=store, default_region="SE3")

        preferences = service.get_preferences()

        assert preferences.region == "SE3"
        assert preferences.theme is None

    def test_default_region_without_any_backend_value(self) -> None:
        service = PreferenceService(repository=PreferenceStore([CookieBackend()]), default_region="SE3")

        assert service.get_region() == "SE3"

    def test_set_region_normalizes_case(self, store) -> None:
        service = PreferenceService(repository=store, default_region="SE3")

        result = service.set_region("se1")

        assert result.key == "selectedRegion"
        assert result.value == "SE1"
        assert result.backends_written == result.backends_total == 3
        assert service.get_region() == "SE1"

    def test_set_theme(self, store) -> None:
        service = PreferenceService(repository=store, default_region="SE3")

        service.set_theme("Dark")

        assert service.get_theme() == "dark"

    @pytest.mark.parametrize("method, value", [("set_region", "SE5"), ("set_region", ""), ("set_theme", "blue")])
    def test_invalid_values_rejected(self, store, method, value) -> None:
        service = PreferenceService(repository=store, default_region="SE3")

        with pytest.raises(HTTPException) as exc_info:
            getattr(service, method)(value)

        assert exc_info.value.status_code == 400

    def test_partial_write_is_reported(self) -> None:
        store = PreferenceStore([FailingBackend(), CookieBackend()])
        service = PreferenceService(repository=store, default_region="SE3")

        result = service.set_region("SE4")

        assert result.backends_written == 1
        assert result.backends_total == 2
        assert service.get_region() == "SE4"
