#roilens/domain/services/i_key_value_storage.py
"""
Key/value persistence interface.

A small, explicitly typed surface (get/set/remove by key) for values that must
survive a restart. Implementations may be slow or unreliable; callers decide
how to degrade when they fail.
"""
from abc import ABC, abstractmethod
from typing import Optional

from roilens.domain.common.result import Result


class IKeyValueStorage(ABC):
    """Interface for string key/value persistence."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a stored value.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if nothing is stored under the key

        Raises:
            Exception: Implementations may raise on I/O failure
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> Result[bool]:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: String value to store

        Returns:
            Result indicating success or failure
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> Result[bool]:
        """
        Remove the value stored under a key. Removing a missing key succeeds.

        Args:
            key: Storage key

        Returns:
            Result indicating success or failure
        """
        pass
