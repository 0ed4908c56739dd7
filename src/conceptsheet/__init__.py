"""Character Concept Generator: three-view concept sheets from one photo."""

__version__ = "1.0.0"
