"""Unit tests for the HierarchyManager — forest shape, cycle rejection, traversals."""

import logging

import pytest

from orgstructure.application.services import HierarchyManager
from orgstructure.domain.entities import Structure
from orgstructure.domain.exceptions import (
    EntityNotFoundError,
    HierarchyCycleError,
    HierarchyDepthError,
)


def _node(structure_id: int, parent_id: int | None, name: str | None = None) -> Structure:
    return Structure(
        id=structure_id,
        designation_fr=name or f"Node {structure_id}",
        acronym_fr=f"N{structure_id}",
        structure_type_id=1,
        parent_id=parent_id,
    )


@pytest.fixture
def tree(structure_repo):
    """1 → {2 → {4}, 3}; 5 is a standalone root."""
    for node in [_node(1, None), _node(2, 1), _node(3, 1), _node(4, 2), _node(5, None)]:
        structure_repo.put(node)
    return structure_repo


# ── validate_parent ──────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_validate_parent_returns_parent(hierarchy: HierarchyManager, tree):
    parent = await hierarchy.validate_parent(2, current_id=5)
    assert parent.id == 2


@pytest.mark.asyncio
async def test_validate_parent_on_create_skips_cycle_check(hierarchy: HierarchyManager, tree):
    assert (await hierarchy.validate_parent(4)).id == 4


@pytest.mark.asyncio
async def test_validate_parent_unknown(hierarchy: HierarchyManager, tree):
    with pytest.raises(EntityNotFoundError):
        await hierarchy.validate_parent(99, current_id=1)


@pytest.mark.asyncio
async def test_validate_parent_self(hierarchy: HierarchyManager, tree):
    with pytest.raises(HierarchyCycleError) as exc_info:
        await hierarchy.validate_parent(3, current_id=3)
    assert "own parent" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("descendant_id", [2, 3, 4])
async def test_validate_parent_descendant(hierarchy: HierarchyManager, tree, descendant_id: int):
    with pytest.raises(HierarchyCycleError):
        await hierarchy.validate_parent(descendant_id, current_id=1)


# ── is_ancestor_of ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_is_ancestor_of(hierarchy: HierarchyManager, tree):
    assert await hierarchy.is_ancestor_of(1, 4) is True
    assert await hierarchy.is_ancestor_of(2, 4) is True
    assert await hierarchy.is_ancestor_of(3, 4) is False
    assert await hierarchy.is_ancestor_of(4, 1) is False
    assert await hierarchy.is_ancestor_of(5, 4) is False


@pytest.mark.asyncio
async def test_structure_is_not_its_own_ancestor(hierarchy: HierarchyManager, tree):
    assert await hierarchy.is_ancestor_of(2, 2) is False


@pytest.mark.asyncio
async def test_is_ancestor_of_unknown_descendant(hierarchy: HierarchyManager, tree):
    assert await hierarchy.is_ancestor_of(1, 99) is False


@pytest.mark.asyncio
async def test_corrupted_cycle_terminates(structure_repo, caplog):
    # 1 → 2 → 3 → 1, written without validation
    for node in [_node(1, 3), _node(2, 1), _node(3, 2)]:
        structure_repo.put(node)
    manager = HierarchyManager(structure_repo, max_depth=64)

    with caplog.at_level(logging.WARNING):
        assert await manager.is_ancestor_of(9, 1) is False
        ancestors = await manager.get_ancestors(1)

    assert {a.id for a in ancestors} == {2, 3}
    assert "Cycle in parent chain" in caplog.text


@pytest.mark.asyncio
async def test_depth_guard_stops_long_chain(structure_repo, caplog):
    structure_repo.put(_node(1, None))
    for i in range(2, 12):
        structure_repo.put(_node(i, i - 1))
    manager = HierarchyManager(structure_repo, max_depth=5)

    with caplog.at_level(logging.WARNING):
        assert await manager.is_ancestor_of(1, 11) is False

    assert "exceeded max depth" in caplog.text


@pytest.fixture
def long_chain(structure_repo):
    """1 → 2 → ... → 11, plus an unrelated root 20."""
    structure_repo.put(_node(1, None))
    for i in range(2, 12):
        structure_repo.put(_node(i, i - 1))
    structure_repo.put(_node(20, None, name="Zulu"))
    return structure_repo


@pytest.mark.asyncio
async def test_reparent_past_depth_bound_is_rejected(long_chain, caplog):
    manager = HierarchyManager(long_chain, max_depth=5)

    with caplog.at_level(logging.WARNING):
        with pytest.raises(HierarchyDepthError) as exc_info:
            await manager.validate_parent(11, current_id=1)

    assert isinstance(exc_info.value, HierarchyCycleError)
    assert "exceeds 5 levels" in str(exc_info.value)
    assert "exceeded max depth" in caplog.text


@pytest.mark.asyncio
async def test_reparent_under_corrupted_chain_is_rejected(structure_repo):
    for node in [_node(1, 3), _node(2, 1), _node(3, 2), _node(4, None)]:
        structure_repo.put(node)
    manager = HierarchyManager(structure_repo, max_depth=64)

    with pytest.raises(HierarchyDepthError):
        await manager.validate_parent(2, current_id=4)


@pytest.mark.asyncio
async def test_validate_parent_within_bound_still_accepts(long_chain):
    manager = HierarchyManager(long_chain, max_depth=5)
    assert (await manager.validate_parent(4, current_id=20)).id == 4


@pytest.mark.asyncio
async def test_potential_parents_exclude_descendants_below_bound(long_chain):
    manager = HierarchyManager(long_chain, max_depth=5)

    candidates = await manager.find_potential_parents(1)

    assert [c.id for c in candidates] == [20]


# ── Upward / downward traversals ─────────────────────────────────────

@pytest.mark.asyncio
async def test_get_ancestors_root_first(hierarchy: HierarchyManager, tree):
    assert [a.id for a in await hierarchy.get_ancestors(4)] == [1, 2]
    assert await hierarchy.get_ancestors(1) == []


@pytest.mark.asyncio
async def test_get_depth(hierarchy: HierarchyManager, tree):
    assert await hierarchy.get_depth(1) == 0
    assert await hierarchy.get_depth(4) == 2


@pytest.mark.asyncio
async def test_get_descendants_breadth_first(hierarchy: HierarchyManager, tree):
    assert [d.id for d in await hierarchy.get_descendants(1)] == [2, 3, 4]
    assert await hierarchy.get_descendants(5) == []


@pytest.mark.asyncio
async def test_get_descendants_unknown(hierarchy: HierarchyManager, tree):
    with pytest.raises(EntityNotFoundError):
        await hierarchy.get_descendants(99)


@pytest.mark.asyncio
async def test_find_potential_parents_excludes_subtree(hierarchy: HierarchyManager, tree):
    candidates = await hierarchy.find_potential_parents(2)
    assert sorted(c.id for c in candidates) == [1, 3, 5]


@pytest.mark.asyncio
async def test_find_potential_parents_of_leaf(hierarchy: HierarchyManager, tree):
    candidates = await hierarchy.find_potential_parents(4)
    assert sorted(c.id for c in candidates) == [1, 2, 3, 5]


@pytest.mark.asyncio
async def test_find_potential_parents_unknown(hierarchy: HierarchyManager, tree):
    with pytest.raises(EntityNotFoundError):
        await hierarchy.find_potential_parents(99)


@pytest.mark.asyncio
async def test_get_tree_forest(hierarchy: HierarchyManager, tree):
    forest = await hierarchy.get_tree()

    assert [root["id"] for root in forest] == [1, 5]
    assert [child["id"] for child in forest[0]["children"]] == [2, 3]
    assert forest[0]["children"][0]["children"][0]["id"] == 4
    assert forest[1]["children"] == []


@pytest.mark.asyncio
async def test_get_tree_subtree(hierarchy: HierarchyManager, tree):
    subtree = await hierarchy.get_tree(2)
    assert len(subtree) == 1
    assert subtree[0]["id"] == 2
    assert [c["id"] for c in subtree[0]["children"]] == [4]
