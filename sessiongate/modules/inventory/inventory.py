import json
import logging
from typing import Any, Dict, List, Optional, Set

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from ..api.models import ItemRef

logger = logging.getLogger(__name__)

_item_refs = TypeAdapter(List[ItemRef])


class InventoryError(Exception):
    """Raised when inventory data cannot be read."""


def parse_items_query(raw: Optional[str]) -> List[str]:
    """
    Parse the ``items`` query parameter into a list of item ids.

    Args:
        raw: JSON array of objects with an ``id`` field, e.g. '[{"id": 3}]'

    Returns:
        Item ids as strings; empty when absent or malformed
    """
    if not raw:
        return []

    try:
        refs = _item_refs.validate_json(raw)
    except ValidationError as e:
        logger.error(f"Invalid items query format: {e}")
        return []

    return [str(ref.id) for ref in refs]


class InventoryModule:
    def __init__(self, redis_client):
        """
        Initialize inventory module.

        Args:
            redis_client: Async Redis client
        """
        self.redis = redis_client

    async def get_nested_inventory(self, target_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get inventory items with their children resolved.

        Args:
            target_ids: Item ids to fetch; empty means every root item

        Returns:
            List of item dicts, each with a nested ``children`` list

        Raises:
            InventoryError: On store failure or malformed item data
        """
        try:
            if not target_ids:
                target_ids = sorted(await self.redis.smembers("inventory:roots"))

            items = []
            for item_id in target_ids:
                item = await self._load_nested(str(item_id), set())
                if item is not None:
                    items.append(item)
            return items
        except InventoryError:
            raise
        except (RedisError, ValueError, TypeError) as e:
            raise InventoryError(str(e)) from e

    async def _load_nested(self, item_id: str, seen: Set[str]) -> Optional[Dict[str, Any]]:
        # Cut cycles in the child graph
        if item_id in seen:
            return None
        seen = seen | {item_id}

        data = await self.redis.get(f"inventory:item:{item_id}")
        if not data:
            return None

        item = json.loads(data)
        if not isinstance(item, dict):
            raise InventoryError(f"inventory item {item_id} is not an object")

        child_ids = item.get("children") or []
        if not isinstance(child_ids, list):
            raise InventoryError(f"inventory item {item_id} has non-list children")

        children = []
        for child_id in child_ids:
            child = await self._load_nested(str(child_id), seen)
            if child is not None:
                children.append(child)
        item["children"] = children
        return item
