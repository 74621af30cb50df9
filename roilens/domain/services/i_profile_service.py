# roilens/domain/services/i_profile_service.py
from abc import ABC, abstractmethod
from typing import List

from roilens.domain.models.prompt_profile import PromptProfile
from roilens.domain.common.result import Result


class IProfileService(ABC):
    """Service for managing prompt profiles."""

    @abstractmethod
    def get_profile(self, profile_name: str) -> Result[PromptProfile]:
        """Get a profile, falling back to the default profile for unknown names."""
        pass

    @abstractmethod
    def save_profile(self, profile: PromptProfile) -> Result[bool]:
        """Save a user override of a profile."""
        pass

    @abstractmethod
    def get_all_profiles(self) -> Result[List[PromptProfile]]:
        """Get every built-in and user-defined profile."""
        pass

    @abstractmethod
    def build_system_prompt(self, profile_name: str, custom_prompt: str = "",
                            google_search_enabled: bool = True) -> str:
        """Assemble the system instruction for a profile and the user's context."""
        pass
