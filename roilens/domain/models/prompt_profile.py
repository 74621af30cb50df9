# roilens/domain/models/prompt_profile.py
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass
class PromptProfile:
    """System instruction building blocks for one assistant persona."""
    name: str
    intro: str = ""
    format_requirements: str = ""
    search_usage: str = ""  # Only included when search augmentation is on
    content: str = ""
    output_instructions: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("name")
        return data
