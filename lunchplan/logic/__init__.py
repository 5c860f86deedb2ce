"""Logic layer: ownership guard, caller-boundary validation, plan operations, shopping list.

Import from here for convenience:

    from lunchplan.logic import authorize, build_shopping_list
"""
from .authorization import authorize  # noqa: F401
from .shopping.list_builder import build_shopping_list  # noqa: F401

__all__ = ['authorize', 'build_shopping_list']
