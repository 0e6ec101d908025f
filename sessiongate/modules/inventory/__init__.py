"""
Inventory Module - Black Box Interface

Purpose: Serve nested inventory data to authenticated callers
Interface: get_nested_inventory(), parse_items_query()
Hidden: Redis key layout, child resolution

Replaceable with any inventory backend without affecting the auth gate.
"""

from .inventory import InventoryError, InventoryModule, parse_items_query

__all__ = ["InventoryError", "InventoryModule", "parse_items_query"]
