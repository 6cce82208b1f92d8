"""
Base MathValue class for the kernel's value types.

Every value type renders to a human-readable string and to LaTeX, and can be
converted back to plain Python data for the calling layer.

Concrete subclasses inherit from both BaseModel and MathValue, e.g.
`class Interval(BaseModel, MathValue):`. MathValue itself does not inherit
from BaseModel to avoid MRO conflicts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class MathValue(ABC):
    """
    Base class for all mathematical value objects.

    Provides:
    - Multiple output formats (string, TeX)
    - Conversion to Python native data

    Subclasses must implement all abstract methods.
    """

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""
        pass

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        pass

    def __str__(self) -> str:
        """String representation (uses to_string)."""
        return self.to_string()

    def __repr__(self) -> str:
        """Debug representation."""
        return f"{self.__class__.__name__}({self.to_string()})"

    def to_python(self) -> Any:
        """
        Convert MathValue to Python native type.

        Returns:
            Python native value (float, tuple, list, etc.)
        """
        # Default implementation - subclasses should override
        raise NotImplementedError(f"{self.__class__.__name__}.to_python() not implemented")
