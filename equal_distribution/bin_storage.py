# -*- coding: utf-8 -*-
"""
Helpers for the mutable collections that hold the items of a bin.

A bin can be any list-like (append/pop) or set-like (add/pop) collection.
"""

from collections.abc import MutableSequence, MutableSet
from typing import Any, Callable, Collection, Optional

Equality = Callable[[Any, Any], bool]


def insert_item(collection: Collection, item: Any) -> None:
    """Add an item to a bin collection."""
    if isinstance(collection, MutableSet):
        collection.add(item)
    elif isinstance(collection, MutableSequence):
        collection.append(item)
    elif hasattr(collection, "add"):
        collection.add(item)
    elif hasattr(collection, "append"):
        collection.append(item)
    else:
        raise TypeError(f"Bin collection of type {type(collection).__name__} does not support insertion")


def take_item(collection: Collection) -> Any:
    """Remove and return some item of a bin collection."""
    return collection.pop()


def contains_item(collection: Collection, item: Any, equality: Optional[Equality] = None) -> bool:
    """Membership test, optionally with a custom equality."""
    if equality is None:
        return item in collection
    return any(equality(existing, item) for existing in collection)
