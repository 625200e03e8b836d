"""Catalog — фиксированное меню интегрируемых функций."""

from .functions import (
    FUNCTION_CATALOG,
    CatalogEntry,
    FunctionKey,
    UnknownFunctionError,
    exact_integral,
    get_entry,
    get_integrand,
    parse_function_key,
    render_menu,
    select_by_menu_index,
)

__all__ = [
    "FUNCTION_CATALOG",
    "CatalogEntry",
    "FunctionKey",
    "UnknownFunctionError",
    "exact_integral",
    "get_entry",
    "get_integrand",
    "parse_function_key",
    "render_menu",
    "select_by_menu_index",
]
