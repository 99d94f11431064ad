"""
Manual display ordering for galleries and sources.

Within one collection the display_order values form 0..n-1.
"""

from datetime import datetime, timezone
from typing import Dict, List, Sequence, TypeVar

from core.exceptions import ValidationError
from core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _created_key(item) -> datetime:
    created_at = getattr(item, "created_at", None)
    if created_at is None:
        return _EPOCH
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


def sort_by_display_order(items: Sequence[T]) -> List[T]:
    """Sort by display_order; ties fall back to created_at, then id."""
    return sorted(items, key=lambda item: (item.display_order, _created_key(item), item.id))


def move_item(ids: Sequence[str], item_id: str, to_index: int) -> List[str]:
    """Move one id to a new position, shifting the others."""
    if item_id not in ids:
        raise ValidationError(f"Unknown id '{item_id}'", field="id")
    if to_index < 0 or to_index >= len(ids):
        raise ValidationError(f"Position {to_index} is out of range", field="to_index")

    result = [i for i in ids if i != item_id]
    result.insert(to_index, item_id)
    return result


def validate_permutation(current_ids: Sequence[str], new_ids: Sequence[str]) -> None:
    """The new order must contain every current id exactly once."""
    if len(new_ids) != len(set(new_ids)):
        raise ValidationError("Order contains duplicate ids", field="ids")
    if set(new_ids) != set(current_ids):
        raise ValidationError("Order must list every item exactly once", field="ids")


def assign_display_order(ordered_items: Sequence[T]) -> Dict[str, int]:
    """
    Positions that differ from the stored display_order.

    Returns:
        Mapping of id -> new display_order (only changed items)
    """
    return {
        item.id: index
        for index, item in enumerate(ordered_items)
        if item.display_order != index
    }


async def persist_order(repo, ordered_items: Sequence[T]) -> int:
    """
    Write the positions of `ordered_items` through `repo.set_display_order`.

    Returns:
        Number of rows updated
    """
    changes = assign_display_order(ordered_items)
    for item_id, position in changes.items():
        await repo.set_display_order(item_id, position)
    if changes:
        logger.info(f"Updated display order of {len(changes)} items")
    return len(changes)
