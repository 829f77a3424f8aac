"""Hierarchy manager — enforces the forest shape of the structure tree.

Parent links are stored as plain ids, so every traversal here is an
iterative walk of id lookups through the repository port. Walks are
bounded by ``max_depth`` and stop on a revisited node, so corrupted data
(a cycle written behind the service's back) ends a walk instead of
looping forever. Read queries treat a cut-short walk as "not found";
parent validation treats it as a rejection.
"""

import logging
from collections.abc import AsyncIterator

from orgstructure.application.interfaces import StructureRepository
from orgstructure.domain.entities import Structure
from orgstructure.domain.exceptions import (
    EntityNotFoundError,
    HierarchyCycleError,
    HierarchyDepthError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


class _WalkCutShort(Exception):
    """A strict walk hit the depth bound or a revisited node."""


class HierarchyManager:
    """Validates parent assignments and answers ancestor/descendant queries."""

    def __init__(self, repository: StructureRepository, max_depth: int = DEFAULT_MAX_DEPTH):
        self._repo = repository
        self._max_depth = max_depth

    # ── Validation ───────────────────────────────────────────────────

    async def validate_parent(
        self, candidate_parent_id: int, current_id: int | None = None
    ) -> Structure:
        """Resolve a proposed parent and reject assignments that create a cycle.

        ``current_id`` is the structure being updated (``None`` on create,
        where no cycle is possible). Returns the resolved parent. When the
        parent chain of the candidate cannot be walked to a root within
        ``max_depth`` steps the move is rejected with HierarchyDepthError.
        """
        parent = await self._repo.get_by_id(candidate_parent_id)
        if parent is None:
            raise EntityNotFoundError("Structure", candidate_parent_id)

        if current_id is not None:
            if candidate_parent_id == current_id:
                raise HierarchyCycleError(current_id, candidate_parent_id)
            found = await self._chain_contains(parent, current_id)
            if found is None:
                raise HierarchyDepthError(current_id, candidate_parent_id, self._max_depth)
            if found:
                raise HierarchyCycleError(current_id, candidate_parent_id)

        return parent

    # ── Upward queries ───────────────────────────────────────────────

    async def is_ancestor_of(self, ancestor_id: int, descendant_id: int) -> bool:
        """True if ``ancestor_id`` appears in the parent chain of ``descendant_id``.

        A structure is never its own ancestor. Unknown ids answer False, and
        so does a walk cut short by the depth guard.
        """
        if ancestor_id == descendant_id:
            return False
        descendant = await self._repo.get_by_id(descendant_id)
        if descendant is None:
            return False
        return bool(await self._chain_contains(descendant, ancestor_id))

    async def get_ancestors(self, structure_id: int) -> list[Structure]:
        """Full parent chain, root first, excluding the structure itself."""
        structure = await self._require(structure_id)
        ancestors = [a async for a in self._walk_up(structure)]
        return list(reversed(ancestors))

    async def get_depth(self, structure_id: int) -> int:
        """Number of ancestors; 0 for a root."""
        structure = await self._require(structure_id)
        depth = 0
        async for _ in self._walk_up(structure):
            depth += 1
        return depth

    # ── Downward queries ─────────────────────────────────────────────

    async def get_descendants(self, structure_id: int) -> list[Structure]:
        """All transitive children, breadth-first (level by level)."""
        descendants, _ = await self._collect_descendants(structure_id)
        return descendants

    async def find_potential_parents(self, structure_id: int) -> list[Structure]:
        """Every structure that could become the parent without creating a cycle.

        Excludes the structure itself and all of its descendants. When the
        subtree is deeper than ``max_depth`` the remaining candidates are
        kept only if their own parent chain provably avoids ``structure_id``.
        """
        descendants, truncated = await self._collect_descendants(structure_id)
        excluded = {structure_id} | {d.id for d in descendants}
        candidates = [s for s in await self._repo.find_all() if s.id not in excluded]
        if truncated:
            candidates = [
                c for c in candidates if await self._chain_contains(c, structure_id) is False
            ]
        return candidates

    async def _collect_descendants(self, structure_id: int) -> tuple[list[Structure], bool]:
        """Breadth-first descendants plus whether the depth bound cut the walk short."""
        await self._require(structure_id)
        descendants: list[Structure] = []
        seen: set[int] = {structure_id}
        frontier = [structure_id]
        level = 0

        while frontier and level < self._max_depth:
            next_frontier: list[int] = []
            for node_id in frontier:
                for child in await self._repo.find_children(node_id):
                    if child.id in seen:
                        logger.warning(
                            "Structure %s reached twice below %s; parent links are corrupted",
                            child.id,
                            structure_id,
                        )
                        continue
                    seen.add(child.id)
                    descendants.append(child)
                    next_frontier.append(child.id)
            frontier = next_frontier
            level += 1

        if frontier:
            logger.warning(
                "Descendant walk from structure %s stopped at max depth %d",
                structure_id,
                self._max_depth,
            )
        return descendants, bool(frontier)

    async def get_tree(self, root_id: int | None = None) -> list[dict]:
        """Build the hierarchy as nested dicts for UI display.

        Returns every root tree, or the single subtree under ``root_id``.
        Each node: {id, designation_fr, acronym_fr, structure_type_id, children}.
        """
        all_structures = await self._repo.find_all()
        children_map: dict[int | None, list[Structure]] = {}
        for structure in all_structures:
            children_map.setdefault(structure.parent_id, []).append(structure)

        def _build_node(structure: Structure, depth: int) -> dict:
            kids = children_map.get(structure.id, []) if depth < self._max_depth else []
            return {
                "id": structure.id,
                "designation_fr": structure.designation_fr,
                "acronym_fr": structure.acronym_fr,
                "structure_type_id": structure.structure_type_id,
                "children": [
                    _build_node(c, depth + 1)
                    for c in sorted(kids, key=lambda x: x.designation_fr)
                ],
            }

        if root_id is not None:
            root = await self._require(root_id)
            return [_build_node(root, 0)]

        roots = children_map.get(None, [])
        return [_build_node(r, 0) for r in sorted(roots, key=lambda x: x.designation_fr)]

    # ── Internals ────────────────────────────────────────────────────

    async def _require(self, structure_id: int) -> Structure:
        structure = await self._repo.get_by_id(structure_id)
        if structure is None:
            raise EntityNotFoundError("Structure", structure_id)
        return structure

    async def _chain_contains(self, structure: Structure, target_id: int) -> bool | None:
        """Whether ``target_id`` is above ``structure``; None if the walk was cut short."""
        try:
            async for ancestor in self._walk_up(structure, strict=True):
                if ancestor.id == target_id:
                    return True
        except _WalkCutShort:
            return None
        return False

    async def _walk_up(
        self, structure: Structure, *, strict: bool = False
    ) -> AsyncIterator[Structure]:
        """Yield the parent, grandparent, ... of ``structure`` up to its root.

        A revisited node or the depth bound ends the walk with a warning;
        ``strict`` walks raise _WalkCutShort there instead of just stopping.
        """
        visited: set[int | None] = {structure.id}
        current_id = structure.parent_id
        steps = 0

        while current_id is not None:
            if current_id in visited:
                logger.warning(
                    "Cycle in parent chain of structure %s at %s", structure.id, current_id
                )
                if strict:
                    raise _WalkCutShort()
                return
            if steps >= self._max_depth:
                logger.warning(
                    "Parent walk from structure %s exceeded max depth %d",
                    structure.id,
                    self._max_depth,
                )
                if strict:
                    raise _WalkCutShort()
                return
            parent = await self._repo.get_by_id(current_id)
            if parent is None:
                return
            yield parent
            visited.add(current_id)
            steps += 1
            current_id = parent.parent_id
