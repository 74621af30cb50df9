# roilens/domain/services/i_config_repository_service.py
"""
Configuration repository interface for application settings.

Defines the contract for storing and retrieving application configuration.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Tuple

from roilens.domain.common.result import Result


class IConfigRepository(ABC):
    """
    Interface for configuration repository.

    Defines methods for loading, saving, and accessing configuration settings.
    """

    @abstractmethod
    def load_config(self, force_reload: bool = False) -> Result[Dict[str, Any]]:
        """
        Load configuration from storage.

        Args:
            force_reload: Whether to force a reload from storage

        Returns:
            Result containing the configuration dictionary
        """
        pass

    @abstractmethod
    def save_config(self, config: Dict[str, Any]) -> Result[bool]:
        """
        Save configuration to storage.

        Args:
            config: Configuration dictionary

        Returns:
            Result indicating success or failure
        """
        pass

    @abstractmethod
    def get_global_setting(self, key: str, default: Any = None) -> Any:
        """
        Get a global application setting.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        pass

    @abstractmethod
    def set_global_setting(self, key: str, value: Any) -> Result[bool]:
        """
        Set a global application setting.

        Args:
            key: Setting key
            value: Setting value

        Returns:
            Result indicating success or failure
        """
        pass

    @abstractmethod
    def get_api_key(self) -> str:
        """
        Get the model API key.

        Returns:
            The stored key, or the GEMINI_API_KEY environment variable when none is stored
        """
        pass

    @abstractmethod
    def get_selected_profile(self) -> str:
        """Get the name of the prompt profile used for dispatches."""
        pass

    @abstractmethod
    def get_custom_prompt(self) -> str:
        """Get the user's extra context appended to the system prompt."""
        pass

    @abstractmethod
    def get_text_mode_models(self) -> Tuple[str, str]:
        """
        Get the model identifiers for multi-image dispatch.

        Returns:
            (primary model, fallback model)
        """
        pass

    @abstractmethod
    def get_jpeg_quality(self) -> int:
        """Get the JPEG quality (1-100) used when encoding captures."""
        pass

    @abstractmethod
    def get_thumbnail_size(self) -> Tuple[int, int]:
        """Get the maximum (width, height) requested from capture sources."""
        pass

    @abstractmethod
    def register_observer(self, callback: callable) -> None:
        """
        Register a callback function to be notified of config changes.

        Args:
            callback: Function to call when config changes
        """
        pass

    @abstractmethod
    def unregister_observer(self, callback: callable) -> None:
        """
        Unregister a previously registered observer callback.

        Args:
            callback: Previously registered callback function
        """
        pass
