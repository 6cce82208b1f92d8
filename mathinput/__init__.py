"""mathinput - parsing, canonicalization and formatting kernel for math input widgets.

Subpackages:
- mathinput.math: value types (fractions, angles, intervals, units, vectors,
  matrices, tensors, bounded numeric text)
- mathinput.core: configuration, logging and the error taxonomy
"""

__version__ = "0.1.0"

__all__ = []
