from dataclasses import dataclass, field
from typing import List, Tuple

# A rectangle: x, y, width, height, red, green, blue
Entity = Tuple[float, float, float, float, float, float, float]

@dataclass
class WorldSize:
    """Declares the size of the world the following frames are drawn in."""
    width: int
    height: int

@dataclass
class Frame:
    """One picture: a list of colored rectangles."""
    entities: List[Entity] = field(default_factory=list)
