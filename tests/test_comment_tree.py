from datetime import datetime

from portfolio.features.comments.schemas import CommentAuthorOut, CommentOut
from portfolio.features.comments.tree import (
    attach_direct_replies,
    build_thread,
    children_first,
    descendant_ids,
    index_by_parent,
)


def _row(id, parent_id=None):
    return CommentOut(
        id=id,
        content=f"c-{id}",
        user_id="u1",
        project_id="p1",
        parent_id=parent_id,
        created_at=datetime(2024, 1, 1),
        user=CommentAuthorOut(pseudo="alice"),
    )


def test_index_by_parent_keeps_input_order():
    rows = [_row("c3", "c1"), _row("c2", "c1"), _row("c1")]

    children = index_by_parent(rows)

    assert [r.id for r in children["c1"]] == ["c3", "c2"]
    assert [r.id for r in children[None]] == ["c1"]


def test_direct_replies_stop_at_one_level():
    rows = [_row("c3", "c2"), _row("c2", "c1"), _row("c1")]

    out = {c.id: c for c in attach_direct_replies(rows)}

    assert [r.id for r in out["c1"].replies] == ["c2"]
    assert out["c1"].replies[0].replies == []
    assert [r.id for r in out["c2"].replies] == ["c3"]
    assert len(out) == 3


def test_thread_nests_and_keeps_orphans_as_roots():
    rows = [_row("c4", "gone"), _row("c3", "c2"), _row("c2", "c1"), _row("c1")]

    thread = build_thread(rows)

    assert [c.id for c in thread] == ["c4", "c1"]
    assert thread[1].replies[0].id == "c2"
    assert thread[1].replies[0].replies[0].id == "c3"


def test_thread_does_not_mutate_input():
    rows = [_row("c2", "c1"), _row("c1")]

    build_thread(rows)

    assert all(r.replies == [] for r in rows)


def test_descendant_ids_walks_whole_subtree():
    parent_of = {"c1": None, "c2": "c1", "c3": "c2", "c4": "c1", "c5": None}

    assert descendant_ids("c1", parent_of) == {"c2", "c3", "c4"}
    assert descendant_ids("c5", parent_of) == set()


def test_children_first_orders_by_depth_not_by_input():
    # parents listés avant leurs réponses, comme avec des horodatages égaux
    parent_of = {"c1": None, "c2": "c1", "c3": "c2", "c4": "c1", "c5": None}

    order = children_first(parent_of)

    position = {cid: i for i, cid in enumerate(order)}
    for child, parent in parent_of.items():
        if parent is not None:
            assert position[child] < position[parent]
    assert order[0] == "c3"
    assert sorted(order) == sorted(parent_of)


def test_children_first_tolerates_orphans_and_cycles():
    parent_of = {"a": "gone", "b": "a", "x": "y", "y": "x"}

    order = children_first(parent_of)

    assert sorted(order) == ["a", "b", "x", "y"]
    assert order.index("b") < order.index("a")
