"""Generic utilities and helpers.

Helpers that are not bound to any specific component
of rowframe and could work in any Python project.
"""

from . import inspect

__all__ = ("inspect",)
