"""Tests for prompt profiles and system prompt assembly."""

import pytest

from roilens.domain.models.prompt_profile import PromptProfile
from roilens.infrastructure.config.json_config_repository import JsonConfigRepository
from roilens.infrastructure.config.profile_service import BUILTIN_PROFILES, ProfileService


@pytest.fixture
def config_repo(tmp_path, logger):
    return JsonConfigRepository(str(tmp_path / "config.json"), logger)


@pytest.fixture
def profiles(config_repo, logger):
    return ProfileService(config_repo, logger)


class TestProfiles:
    def test_builtin_names(self):
        assert set(BUILTIN_PROFILES) == {"interview", "sales", "meeting", "presentation", "negotiation", "exam"}

    def test_unknown_profile_falls_back_to_interview(self, profiles):
        result = profiles.get_profile("karaoke")
        assert result.is_success
        assert result.value.name == "interview"
        assert result.value.intro == BUILTIN_PROFILES["interview"].intro

    def test_override_replaces_only_given_fields(self, profiles):
        profiles.save_profile(PromptProfile(name="sales", intro="You are a closer."))

        profile = profiles.get_profile("sales").value

        assert profile.intro == "You are a closer."
        assert profile.content == BUILTIN_PROFILES["sales"].content

    def test_custom_profile_is_listed(self, profiles):
        profiles.save_profile(PromptProfile(name="standup", intro="Daily standup helper."))

        names = [p.name for p in profiles.get_all_profiles().value]

        assert names[:6] == list(BUILTIN_PROFILES)
        assert names[-1] == "standup"


class TestSystemPrompt:
    def test_section_order(self, profiles):
        prompt = profiles.build_system_prompt("meeting", "Quarterly review")
        meeting = profiles.get_profile("meeting").value

        positions = [prompt.index(section) for section in (
            meeting.intro,
            meeting.format_requirements,
            meeting.search_usage,
            meeting.content,
            "User-provided context\n-----\nQuarterly review\n-----",
            meeting.output_instructions,
        )]
        assert positions == sorted(positions)

    def test_search_section_dropped_when_disabled(self, profiles):
        interview = profiles.get_profile("interview").value

        with_search = profiles.build_system_prompt("interview", google_search_enabled=True)
        without_search = profiles.build_system_prompt("interview", google_search_enabled=False)

        assert interview.search_usage in with_search
        assert interview.search_usage not in without_search

    def test_unknown_profile_uses_interview_prompt(self, profiles):
        assert profiles.build_system_prompt("karaoke") == profiles.build_system_prompt("interview")
