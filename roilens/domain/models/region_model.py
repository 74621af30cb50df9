# roilens/domain/models/region_model.py
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple, Union

REQUIRED_FIELDS = ("x", "y", "width", "height")


@dataclass
class Region:
    """Absolute screen rectangle selected by the user, in logical pixels."""
    x: float
    y: float
    width: float
    height: float
    display_id: Optional[str] = None  # Display the rectangle was drawn on

    @property
    def coordinates(self) -> Tuple[float, float, float, float]:
        """(x, y, width, height)"""
        return self.x, self.y, self.width, self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "displayId": self.display_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Region':
        """
        Build a Region from its stored form.

        Raises:
            ValueError: If the mapping does not describe a valid region
        """
        if not is_valid_region_data(data):
            raise ValueError(f"Invalid region data: {data!r}")
        display_id = data.get("displayId", data.get("display_id"))
        return cls(
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
            display_id=str(display_id) if display_id is not None else None,
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_valid_region_data(data: Union[Region, Mapping[str, Any], None]) -> bool:
    """Check that all four coordinates are present, numeric, and the size is positive."""
    if isinstance(data, Region):
        data = data.to_dict()
    if not isinstance(data, Mapping):
        return False
    if not all(_is_number(data.get(field)) for field in REQUIRED_FIELDS):
        return False
    return data["width"] > 0 and data["height"] > 0
