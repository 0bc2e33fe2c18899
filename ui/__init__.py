"""
UI package initialization.
"""

from . import store_form

__all__ = ["store_form"]
