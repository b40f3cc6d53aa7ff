"""Bounded strings, exact float formatting and wildcard matching for a small testing framework."""

__version__ = "0.1.0"
__all__ = ["fixed_point", "append", "string_utility"]