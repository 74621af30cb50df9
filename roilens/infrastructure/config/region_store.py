# roilens/infrastructure/config/region_store.py
"""
Persistent store for the single current capture region.

Keeps the region in memory so repeated captures skip the storage round trip.
Storage is treated as best-effort: failures are logged and absorbed, so the
worst case is that the user has to select the region again after a restart.
"""
import json
from typing import Any, Mapping, Optional, Union

from roilens.domain.services.i_region_store import IRegionStore
from roilens.domain.services.i_key_value_storage import IKeyValueStorage
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.region_model import Region, is_valid_region_data

STORAGE_KEY = "roiRegion"


class RegionStore(IRegionStore):
    """Region store backed by key/value storage with an in-memory cache."""

    def __init__(self, storage: IKeyValueStorage, logger: ILoggerService,
                 storage_key: str = STORAGE_KEY):
        self.storage = storage
        self.logger = logger
        self.storage_key = storage_key
        self._cached_region: Optional[Region] = None
        self._cleared = False

    def get(self) -> Optional[Region]:
        if self._cached_region is not None:
            return self._cached_region
        if self._cleared:
            return None

        try:
            region_json = self.storage.get_item(self.storage_key)
            if not region_json:
                return None
            self._cached_region = Region.from_dict(json.loads(region_json))
            self.logger.debug("Loaded saved region", region=self._cached_region.coordinates)
            return self._cached_region
        except Exception as e:
            self.logger.warning(f"Error loading saved region: {e}")
            return None

    def set(self, region: Union[Region, Mapping[str, Any]]) -> None:
        if not is_valid_region_data(region):
            self.logger.debug(f"Ignoring invalid region object: {region!r}")
            return

        if not isinstance(region, Region):
            region = Region.from_dict(region)

        # Cache first so this process keeps working even if the write fails
        self._cached_region = region
        self._cleared = False
        try:
            result = self.storage.set_item(self.storage_key, json.dumps(region.to_dict()))
            if result.is_failure:
                self.logger.warning(f"Error saving region: {result.error}")
                return
            self.logger.info("Saved region", region=region.coordinates, display=region.display_id)
        except Exception as e:
            self.logger.warning(f"Error saving region: {e}")

    def clear(self) -> None:
        # Stays cleared for this process even if the stored record survives
        self._cached_region = None
        self._cleared = True
        try:
            result = self.storage.remove_item(self.storage_key)
            if result.is_failure:
                self.logger.warning(f"Error clearing region: {result.error}")
                return
            self.logger.info("Cleared saved region")
        except Exception as e:
            self.logger.warning(f"Error clearing region: {e}")

    def has_region(self) -> bool:
        return self.get() is not None

    def invalidate_cache(self) -> None:
        self._cached_region = None
        self._cleared = False
