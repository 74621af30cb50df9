#roilens/infrastructure/config/json_config_repository.py

"""
JSON-based implementation of the configuration repository.

Stores configuration in a JSON file on disk. The same file backs the
key/value storage used for small persisted records such as the capture region.
"""
import os
import json
import threading
from typing import Dict, Any, Optional, Tuple

from roilens.domain.services.i_config_repository_service import IConfigRepository
from roilens.domain.services.i_key_value_storage import IKeyValueStorage
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.common.result import Result
from roilens.domain.common.errors import ConfigurationError
from roilens.domain.models.dispatch_models import TEXT_MODE_MODEL, FALLBACK_MODEL

API_KEY_ENV_VAR = "GEMINI_API_KEY"
STORAGE_SECTION = "storage"


class JsonConfigRepository(IConfigRepository, IKeyValueStorage):
    """
    JSON-based implementation of the configuration repository.

    Stores configuration in a JSON file and provides thread-safe access.
    """

    def __init__(self, config_file: str, logger: ILoggerService):
        """
        Initialize the repository.

        Args:
            config_file: Path to the JSON configuration file
            logger: Logger service
        """
        self.config_file = config_file
        self.logger = logger
        self._config_cache = None
        self._last_modified = 0
        self._lock = threading.RLock()
        self._observers = []

        # Default configuration with consistent types
        self.DEFAULT_CONFIG = {
            "api_key": "",
            "selected_profile": "interview",
            "custom_prompt": "",
            "text_mode_model": TEXT_MODE_MODEL,
            "fallback_model": FALLBACK_MODEL,
            "jpeg_quality": 80,  # Always store as int
            "thumbnail_size": [3840, 2160],
            "log_level": "INFO",
            "log_dir": "",  # Empty: console only
            "prompt_profiles": {},
            STORAGE_SECTION: {},
            "app_version": "1.0.0"
        }

    def load_config(self, force_reload: bool = False) -> Result[Dict[str, Any]]:
        """
        Load configuration from storage.

        Args:
            force_reload: Whether to force a reload from storage

        Returns:
            Result containing the configuration dictionary
        """
        with self._lock:
            # Reload when the file changed behind our back
            try:
                if os.path.exists(self.config_file):
                    mtime = os.path.getmtime(self.config_file)
                    if mtime > self._last_modified:
                        force_reload = True
            except OSError as e:
                self.logger.debug(f"Error checking config file modification time: {e}")

            if self._config_cache is not None and not force_reload:
                return Result.ok(self._config_cache)

            if not os.path.exists(self.config_file):
                self.logger.warning("Config file not found. Creating new configuration with default settings.")
                config = json.loads(json.dumps(self.DEFAULT_CONFIG))
                save_result = self.save_config(config)
                if save_result.is_failure:
                    return Result.fail(save_result.error)
                return Result.ok(config)

            try:
                with open(self.config_file, "r") as f:
                    config = json.load(f)
                if not isinstance(config, dict):
                    raise ValueError("top-level JSON value is not an object")
                self.logger.debug(f"Config loaded from {self.config_file}")
                self._last_modified = os.path.getmtime(self.config_file)
            except (OSError, ValueError) as e:
                error = ConfigurationError(
                    message=f"Error loading config from {self.config_file}: {e}",
                    details={"path": self.config_file},
                    inner_error=e
                )
                self.logger.error(str(error))
                return Result.fail(error)

            if self._normalize(config):
                save_result = self.save_config(config)
                if save_result.is_failure:
                    return Result.fail(save_result.error)

            self._config_cache = config
            return Result.ok(config)

    def _normalize(self, config: Dict[str, Any]) -> bool:
        """
        Merge missing default keys and coerce critical types in place.

        Returns:
            True if the configuration was changed
        """
        updated = False
        for key, default_value in self.DEFAULT_CONFIG.items():
            if key not in config:
                config[key] = json.loads(json.dumps(default_value))
                updated = True

        if not isinstance(config["jpeg_quality"], int) or isinstance(config["jpeg_quality"], bool):
            try:
                config["jpeg_quality"] = int(config["jpeg_quality"])
            except (ValueError, TypeError):
                config["jpeg_quality"] = self.DEFAULT_CONFIG["jpeg_quality"]
            updated = True

        size = config["thumbnail_size"]
        if not (isinstance(size, list) and len(size) == 2 and all(isinstance(v, int) for v in size)):
            config["thumbnail_size"] = list(self.DEFAULT_CONFIG["thumbnail_size"])
            updated = True

        if not isinstance(config[STORAGE_SECTION], dict):
            config[STORAGE_SECTION] = {}
            updated = True

        return updated

    def save_config(self, config: Dict[str, Any]) -> Result[bool]:
        """
        Save configuration to storage.

        Args:
            config: Configuration dictionary

        Returns:
            Result indicating success or failure
        """
        with self._lock:
            try:
                config_dir = os.path.dirname(self.config_file)
                if config_dir:
                    os.makedirs(config_dir, exist_ok=True)

                # Write to a temporary file, then atomically replace the original
                temp_path = f"{self.config_file}.tmp"
                with open(temp_path, "w") as f:
                    json.dump(config, f, indent=4)
                os.replace(temp_path, self.config_file)

                self.logger.debug(f"Config saved to {self.config_file}")
                self._config_cache = config
                self._last_modified = os.path.getmtime(self.config_file)
            except (OSError, TypeError, ValueError) as e:
                error = ConfigurationError(
                    message=f"Failed to save config: {e}",
                    details={"path": self.config_file},
                    inner_error=e
                )
                self.logger.error(str(error))
                return Result.fail(error)

        self._notify_observers()
        return Result.ok(True)

    def get_global_setting(self, key: str, default: Any = None) -> Any:
        with self._lock:
            config_result = self.load_config()
            if config_result.is_failure:
                self.logger.error(f"Error loading config: {config_result.error}")
                return default

            return config_result.value.get(key, default)

    def set_global_setting(self, key: str, value: Any) -> Result[bool]:
        with self._lock:
            config_result = self.load_config()
            if config_result.is_failure:
                return Result.fail(config_result.error)

            config = config_result.value
            config[key] = value
            return self.save_config(config)

    def get_api_key(self) -> str:
        stored = self.get_global_setting("api_key", "") or ""
        return stored or os.environ.get(API_KEY_ENV_VAR, "")

    def get_selected_profile(self) -> str:
        return self.get_global_setting("selected_profile", "") or "interview"

    def get_custom_prompt(self) -> str:
        return self.get_global_setting("custom_prompt", "") or ""

    def get_text_mode_models(self) -> Tuple[str, str]:
        primary = self.get_global_setting("text_mode_model") or self.DEFAULT_CONFIG["text_mode_model"]
        fallback = self.get_global_setting("fallback_model") or self.DEFAULT_CONFIG["fallback_model"]
        return primary, fallback

    def get_jpeg_quality(self) -> int:
        """
        Get the JPEG quality, clamped to the 1-100 range PIL accepts.

        Returns:
            JPEG quality
        """
        quality = self.get_global_setting("jpeg_quality", 80)
        try:
            return max(1, min(100, int(quality)))
        except (ValueError, TypeError):
            return 80

    def get_thumbnail_size(self) -> Tuple[int, int]:
        width, height = self.get_global_setting("thumbnail_size", self.DEFAULT_CONFIG["thumbnail_size"])
        return int(width), int(height)

    # Key/value storage

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a value from the storage section.

        Raises:
            RuntimeError: If the configuration cannot be loaded
        """
        with self._lock:
            config_result = self.load_config()
            if config_result.is_failure:
                raise RuntimeError(str(config_result.error))
            return config_result.value.get(STORAGE_SECTION, {}).get(key)

    def set_item(self, key: str, value: str) -> Result[bool]:
        with self._lock:
            config_result = self.load_config()
            if config_result.is_failure:
                return Result.fail(config_result.error)

            config = config_result.value
            config.setdefault(STORAGE_SECTION, {})[key] = value
            return self.save_config(config)

    def remove_item(self, key: str) -> Result[bool]:
        with self._lock:
            config_result = self.load_config()
            if config_result.is_failure:
                return Result.fail(config_result.error)

            config = config_result.value
            storage = config.setdefault(STORAGE_SECTION, {})
            if key not in storage:
                return Result.ok(True)
            del storage[key]
            return self.save_config(config)

    def register_observer(self, callback: callable) -> None:
        with self._lock:
            if callback not in self._observers:
                self._observers.append(callback)
                self.logger.debug(f"Observer registered: {callback.__qualname__}")

    def unregister_observer(self, callback: callable) -> None:
        with self._lock:
            if callback in self._observers:
                self._observers.remove(callback)
                self.logger.debug(f"Observer unregistered: {callback.__qualname__}")

    def _notify_observers(self) -> None:
        """Call all registered observer functions."""
        with self._lock:
            observers = self._observers.copy()

        for callback in observers:
            try:
                callback()
            except Exception as e:
                self.logger.error(f"Error notifying observer {callback.__qualname__}: {e}")
