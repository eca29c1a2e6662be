"""
Shared primitive data types for KI games.

Basic color and geometry types used by game configuration, rendering and
collision checks.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class Color(BaseModel):
    """Immutable RGBA color with validation.

    All color components must be in the range [0, 255] inclusive.

    Examples:
        >>> green = Color(r=0, g=255, b=0)
        >>> green.as_rgb_tuple
        (0, 255, 0)
    """
    r: int
    g: int
    b: int
    a: int = 255

    model_config = ConfigDict(frozen=True)

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse '#rrggbb' (the notation used in page styles)."""
        value = value.lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Expected '#rrggbb', got {value!r}")
        return cls(r=int(value[0:2], 16), g=int(value[2:4], 16), b=int(value[4:6], 16))

    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """RGBA tuple for pygame."""
        return (self.r, self.g, self.b, self.a)

    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """RGB tuple (without alpha)."""
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"


class Rectangle(BaseModel):
    """Immutable rectangle defined by its top-left corner and dimensions.

    Examples:
        >>> a = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        >>> a.overlaps(Rectangle(x=5.0, y=5.0, width=10.0, height=10.0))
        True
        >>> a.overlaps(Rectangle(x=10.0, y=0.0, width=10.0, height=10.0))
        False
    """
    x: float
    y: float
    width: float
    height: float

    model_config = ConfigDict(frozen=True)

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @computed_field
    @property
    def right(self) -> float:
        return self.x + self.width

    @computed_field
    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: 'Rectangle') -> bool:
        """Strict overlap on both axes; shared edges do not count."""
        return (self.x < other.right and
                self.right > other.x and
                self.y < other.bottom and
                self.bottom > other.y)

    def __str__(self) -> str:
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
