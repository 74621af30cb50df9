# roilens/domain/models/display_model.py
"""
Display and capture source models, plus the geometry used to pick a display.
"""
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from roilens.domain.models.region_model import Region


@dataclass(frozen=True)
class DisplayInfo:
    """A physical display in the virtual desktop, in logical pixels."""
    id: str
    x: int
    y: int
    width: int
    height: int
    scale_factor: float = 1.0

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height

    def intersection_area(self, region: Region) -> float:
        left = max(self.x, region.x)
        top = max(self.y, region.y)
        right = min(self.x + self.width, region.x + region.width)
        bottom = min(self.y + self.height, region.y + region.height)
        if right <= left or bottom <= top:
            return 0
        return (right - left) * (bottom - top)

    def distance_squared(self, px: float, py: float) -> float:
        """Squared distance from a point to the nearest edge (0 when inside)."""
        dx = max(self.x - px, 0, px - (self.x + self.width - 1))
        dy = max(self.y - py, 0, py - (self.y + self.height - 1))
        return dx * dx + dy * dy


@dataclass
class CaptureSource:
    """A capturable screen together with its full-display bitmap (a PIL image)."""
    display_id: str
    name: str
    image: Any


def nearest_display(displays: Sequence[DisplayInfo], px: float, py: float) -> Optional[DisplayInfo]:
    """Return the display containing the point, or the closest one."""
    if not displays:
        return None
    for display in displays:
        if display.contains(px, py):
            return display
    return min(displays, key=lambda d: d.distance_squared(px, py))


def matching_display(displays: Sequence[DisplayInfo], region: Region) -> Optional[DisplayInfo]:
    """
    Return the display that overlaps the region the most.

    A region lying entirely off-screen falls back to the display nearest its centre.
    """
    if not displays:
        return None
    best = max(displays, key=lambda d: d.intersection_area(region))
    if best.intersection_area(region) > 0:
        return best
    return nearest_display(displays, region.x + region.width / 2, region.y + region.height / 2)
