# roilens/domain/services/i_region_store.py
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from roilens.domain.models.region_model import Region


class IRegionStore(ABC):
    """
    Holder of the single current capture region.

    None of these methods raise: persistence problems degrade to "no region".
    """

    @abstractmethod
    def get(self) -> Optional[Region]:
        """Get the current region, reading persistent storage on a cache miss."""
        pass

    @abstractmethod
    def set(self, region: Union[Region, Mapping[str, Any]]) -> None:
        """Replace the current region. Malformed input is ignored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget the current region, in memory and in storage."""
        pass

    @abstractmethod
    def has_region(self) -> bool:
        """Whether a region is currently defined."""
        pass

    @abstractmethod
    def invalidate_cache(self) -> None:
        """Drop the in-memory copy so the next get() reads storage again."""
        pass
