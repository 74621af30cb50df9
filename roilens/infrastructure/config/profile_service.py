# roilens/infrastructure/config/profile_service.py
from typing import Dict, List

from roilens.domain.services.i_profile_service import IProfileService
from roilens.domain.services.i_config_repository_service import IConfigRepository
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.prompt_profile import PromptProfile
from roilens.domain.models.dispatch_models import DEFAULT_PROFILE
from roilens.domain.common.result import Result
from roilens.domain.common.errors import ConfigurationError

_SHARED_FORMAT = """**RESPONSE FORMAT REQUIREMENTS:**
- Keep responses SHORT and CONCISE (1-3 sentences max)
- Use **markdown formatting** for better readability
- Use **bold** for key points and emphasis
- Use bullet points (-) for lists when appropriate
- Focus on the most essential information only"""

_SHARED_SEARCH = """**SEARCH TOOL USAGE:**
- If the discussion mentions **recent events, news, or current trends**, search for up-to-date information
- If specific **companies, products, or people** come up, search for the latest facts about them
- After searching, give a **concise, informed answer** based on what you found"""

_SHARED_OUTPUT = """**OUTPUT INSTRUCTIONS:**
Provide only the exact words to say in **markdown format**. No coaching, no "you should" statements, no explanations. Be direct and ready to use immediately."""

BUILTIN_PROFILES: Dict[str, PromptProfile] = {
    "interview": PromptProfile(
        name="interview",
        intro="You are an AI-powered interview assistant, designed to act as a discreet on-screen teleprompter. "
              "Your mission is to help the user excel in their job interview by providing concise, impactful, "
              "and ready-to-speak answers.",
        content="Focus on delivering the most essential information the user needs. If the interviewer asks a "
                "technical question, give a precise answer first and a short example second. If they ask a "
                "behavioral question, answer in the situation, action, result order.",
    ),
    "sales": PromptProfile(
        name="sales",
        intro="You are a sales call assistant. Your job is to provide the exact words the salesperson should say "
              "to prospects during sales calls.",
        content="Handle objections with empathy, tie features to the prospect's stated pain points, and always "
                "suggest a clear next step.",
    ),
    "meeting": PromptProfile(
        name="meeting",
        intro="You are a meeting assistant. Your job is to provide the exact words to say during professional "
              "meetings, presentations, and discussions.",
        content="Summarize decisions, surface open action items, and answer questions about status or timelines "
                "with specific, confident statements.",
    ),
    "presentation": PromptProfile(
        name="presentation",
        intro="You are a presentation coach. Your job is to provide the exact words the presenter should say "
              "during presentations, pitches, and public speaking events.",
        content="Answer audience questions with a direct claim backed by one supporting fact, and steer back to "
                "the presentation's key message.",
    ),
    "negotiation": PromptProfile(
        name="negotiation",
        intro="You are a negotiation assistant. Your job is to provide exact words to say during business "
              "negotiations, contract discussions, and deal-making conversations.",
        content="Anchor on value rather than price, counter with reasoned alternatives, and protect the user's "
                "walk-away position.",
    ),
    "exam": PromptProfile(
        name="exam",
        intro="You are an exam assistant designed to help students pass tests efficiently. Your role is to "
              "provide direct, accurate answers to exam questions with minimal explanation.",
        format_requirements="""**RESPONSE FORMAT REQUIREMENTS:**
- Keep responses SHORT and CONCISE (1-2 sentences max)
- Use **markdown formatting** for better readability
- Use **bold** for the answer choice or result
- For multiple choice questions, state the correct option first""",
        content="Read the most recent question carefully, including every answer option, and solve it step by "
                "step internally before answering.",
        output_instructions="""**OUTPUT INSTRUCTIONS:**
Provide direct exam answers in **markdown format**. Include the question text, the answer choice, and a one-sentence justification.""",
    ),
}


class ProfileService(IProfileService):
    """Prompt profiles: built-in defaults overlaid with user overrides from the configuration."""

    def __init__(self, config_repository: IConfigRepository, logger: ILoggerService):
        """
        Initialize the profile service.

        Args:
            config_repository: Configuration repository holding "prompt_profiles" overrides
            logger: Logger service
        """
        self.config_repository = config_repository
        self.logger = logger

    def get_profile(self, profile_name: str) -> Result[PromptProfile]:
        """Get a profile; unknown names resolve to the interview profile."""
        try:
            overrides = self.config_repository.get_global_setting("prompt_profiles", {}) or {}
            name = profile_name if profile_name in BUILTIN_PROFILES or profile_name in overrides \
                else DEFAULT_PROFILE
            if name != profile_name:
                self.logger.debug(f"Unknown profile '{profile_name}', using '{DEFAULT_PROFILE}'")

            base = BUILTIN_PROFILES.get(name, PromptProfile(name=name))
            fields = self._defaults_for(base)
            fields.update({k: v for k, v in overrides.get(name, {}).items() if k in fields and v})

            return Result.ok(PromptProfile(name=name, **fields))
        except Exception as e:
            self.logger.error(f"Error getting profile for {profile_name}: {e}")
            return Result.fail(ConfigurationError(
                message=f"Failed to get profile for {profile_name}",
                details={"profile_name": profile_name},
                inner_error=e
            ))

    def save_profile(self, profile: PromptProfile) -> Result[bool]:
        """Save a profile as a user override."""
        try:
            overrides = dict(self.config_repository.get_global_setting("prompt_profiles", {}) or {})
            overrides[profile.name] = profile.to_dict()
            return self.config_repository.set_global_setting("prompt_profiles", overrides)
        except Exception as e:
            self.logger.error(f"Error saving profile: {e}")
            return Result.fail(ConfigurationError(
                message="Failed to save profile",
                inner_error=e
            ))

    def get_all_profiles(self) -> Result[List[PromptProfile]]:
        try:
            overrides = self.config_repository.get_global_setting("prompt_profiles", {}) or {}
            names = list(BUILTIN_PROFILES) + [name for name in overrides if name not in BUILTIN_PROFILES]

            profiles = []
            for name in names:
                profile_result = self.get_profile(name)
                if profile_result.is_success:
                    profiles.append(profile_result.value)
            return Result.ok(profiles)
        except Exception as e:
            self.logger.error(f"Error getting all profiles: {e}")
            return Result.fail(ConfigurationError(
                message="Failed to get all profiles",
                inner_error=e
            ))

    def build_system_prompt(self, profile_name: str, custom_prompt: str = "",
                            google_search_enabled: bool = True) -> str:
        """
        Assemble the system instruction.

        Sections, in order: intro, format requirements, search usage (only when
        search is enabled), content, user-provided context, output instructions.
        """
        profile_result = self.get_profile(profile_name)
        profile = profile_result.value if profile_result.is_success else BUILTIN_PROFILES[DEFAULT_PROFILE]

        sections = [profile.intro, profile.format_requirements]
        if google_search_enabled:
            sections.append(profile.search_usage)
        sections.append(profile.content)
        sections.append(f"User-provided context\n-----\n{custom_prompt}\n-----")
        sections.append(profile.output_instructions)

        return "\n\n".join(section for section in sections if section)

    def _defaults_for(self, profile: PromptProfile) -> Dict[str, str]:
        """Profile fields with the shared sections filled in where the profile leaves them empty."""
        return {
            "intro": profile.intro,
            "format_requirements": profile.format_requirements or _SHARED_FORMAT,
            "search_usage": profile.search_usage or _SHARED_SEARCH,
            "content": profile.content,
            "output_instructions": profile.output_instructions or _SHARED_OUTPUT,
        }
