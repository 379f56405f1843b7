from __future__ import annotations

from typing import Iterable, Iterator

from schemabuilder.model.ids import IdAllocator, default_allocator
from schemabuilder.model.property import Property


def create(allocator: IdAllocator | None = None) -> Property:
    """Return a blank draft property: empty key, ``string`` type, not required."""
    allocator = allocator or default_allocator()
    return Property(id=allocator.next())


def upsert(tree: Iterable[Property], node_id: str, node: Property) -> list[Property]:
    """Replace the node with ``node_id`` wherever it sits in the tree.

    When no node carries ``node_id`` the replacement is appended at the top
    level, so an update that races a delete re-adds the node instead of failing.
    """
    nodes = list(tree)
    replaced, found = _replace_in(nodes, node_id, node)
    if found:
        return replaced
    return [*nodes, node]


def delete(tree: Iterable[Property], node_id: str) -> list[Property]:
    """Remove ``node_id`` from its parent's children, or clear the parent's items."""
    remaining, _ = _delete_in(list(tree), node_id)
    return remaining


def find(tree: Iterable[Property], node_id: str) -> Property | None:
    for node, _depth in walk(tree):
        if node.id == node_id:
            return node
    return None


def walk(tree: Iterable[Property], depth: int = 0) -> Iterator[tuple[Property, int]]:
    """Depth-first pre-order walk yielding ``(node, depth)``, items after children."""
    for node in tree:
        yield node, depth
        yield from walk(node.children, depth + 1)
        if node.items is not None:
            yield from walk([node.items], depth + 1)


def _replace_in(
    nodes: list[Property], node_id: str, replacement: Property
) -> tuple[list[Property], bool]:
    result: list[Property] = []
    found = False
    for node in nodes:
        if found:
            result.append(node)
        elif node.id == node_id:
            result.append(replacement)
            found = True
        else:
            updated, found = _replace_below(node, node_id, replacement)
            result.append(updated)
    return result, found


def _replace_below(node: Property, node_id: str, replacement: Property) -> tuple[Property, bool]:
    if node.children:
        children, found = _replace_in(node.children, node_id, replacement)
        if found:
            return node.model_copy(update={"children": children}), True
    if node.items is not None:
        if node.items.id == node_id:
            return node.model_copy(update={"items": replacement}), True
        items, found = _replace_below(node.items, node_id, replacement)
        if found:
            return node.model_copy(update={"items": items}), True
    return node, False


def _delete_in(nodes: list[Property], node_id: str) -> tuple[list[Property], bool]:
    result: list[Property] = []
    found = False
    for node in nodes:
        if found:
            result.append(node)
        elif node.id == node_id:
            found = True
        else:
            updated, found = _delete_below(node, node_id)
            result.append(updated)
    return result, found


def _delete_below(node: Property, node_id: str) -> tuple[Property, bool]:
    if node.children:
        children, found = _delete_in(node.children, node_id)
        if found:
            return node.model_copy(update={"children": children}), True
    if node.items is not None:
        if node.items.id == node_id:
            return node.model_copy(update={"items": None}), True
        items, found = _delete_below(node.items, node_id)
        if found:
            return node.model_copy(update={"items": items}), True
    return node, False
