from dataclasses import dataclass

@dataclass(slots=True)
class ShapeRegistry:
    """Empty tag component marking the single entity that stores the ShapeCatalog."""
    pass
