# roilens/domain/models/dispatch_models.py
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_PROFILE = "interview"

TEXT_MODE_MODEL = "gemini-2.5-flash"
# Only for callers that want to retry on their own; never switched to automatically
FALLBACK_MODEL = "gemini-2.0-flash"


@dataclass
class DispatchRequest:
    """A single multi-image analysis request, built fresh for each dispatch."""
    images: List[str] = field(default_factory=list)  # Base64 JPEG payloads, oldest first
    profile: str = DEFAULT_PROFILE
    custom_prompt: str = ""
    override_query: Optional[str] = None  # Accepted but not yet used in the prompt
