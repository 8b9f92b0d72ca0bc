"""Leaf part discovery over the scene tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from cutlist.scene import ComponentInstance, Entity, EntityKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leaf:
    """One physical occurrence of a leaf component instance.

    Instances nested in a shared definition are reached once per enclosing
    instance, so ``occurrence_id`` joins the guids of the enclosing instances
    with the leaf's own guid. Top-level leaves keep their plain guid.
    """

    instance: ComponentInstance
    occurrence_id: str


def discover_leaves(
    entity: Entity, path: Tuple[str, ...] = ()
) -> Tuple[int, Tuple[Leaf, ...]]:
    """Walk ``entity`` depth-first and return ``(leaf_count, leaves)``.

    Hidden entities, and entities on hidden layers, are skipped with their
    whole subtree. An instance whose subtree holds no leaf and whose bounds
    are positive on every axis is itself a leaf.
    """
    if not entity.is_displayed():
        return 0, ()

    if entity.kind is EntityKind.GROUP:
        return _discover_children(entity.children(), path)

    if entity.kind is EntityKind.COMPONENT_INSTANCE:
        child_path = path + (entity.guid,)
        child_count, child_leaves = _discover_children(entity.children(), child_path)
        if child_count == 0:
            bounds = entity.bounds
            if bounds.width > 0 and bounds.height > 0 and bounds.depth > 0:
                return 1, (Leaf(entity, "/".join(child_path)),)
            logger.debug(
                "Dropping degenerate instance %s of %s (bounds %s)",
                entity.guid,
                entity.definition.name,
                bounds,
            )
        return child_count, child_leaves

    return 0, ()


def _discover_children(
    children: Iterable[Entity], path: Tuple[str, ...]
) -> Tuple[int, Tuple[Leaf, ...]]:
    count = 0
    leaves: List[Leaf] = []
    for child in children:
        child_count, child_leaves = discover_leaves(child, path)
        count += child_count
        leaves.extend(child_leaves)
    return count, tuple(leaves)


def collect_leaves(roots: Iterable[Entity]) -> List[Leaf]:
    """Leaves reachable from every root, in discovery order."""
    _, leaves = _discover_children(roots, ())
    return list(leaves)
