"""Pack STL parts onto as few 3D-printer build plates as possible."""

__version__ = "1.0.0"