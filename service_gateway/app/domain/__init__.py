"""
Domain utilities for the Gateway Service.

Request value conversion, result normalization and the token read
operations that do not belong to adapters or transport-specific layers.
"""

from .assets import AssetSummary, TokenMethod, build_asset_summary
from .values import is_numeric, normalize_value, to_number

__all__ = [
    "AssetSummary",
    "TokenMethod",
    "build_asset_summary",
    "is_numeric",
    "normalize_value",
    "to_number",
]
