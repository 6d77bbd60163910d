"""
Mixins that attach validation to application classes.
"""

from .validatable import Validatable, cast_to_annotation, cast_to_bool

__all__ = ["Validatable", "cast_to_annotation", "cast_to_bool"]
