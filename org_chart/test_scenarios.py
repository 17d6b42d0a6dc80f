"""
Org Chart Kernel — Move / Undo / Redo Scenarios

Covers:
  - Root -> X -> Y: move Y under the root, then undo
  - Move semantics on the sample organization (reports promoted)
  - Undo/redo round-trip restores exact snapshots
  - New move after undo discards redo history
  - undo/redo at the ends of history are no-ops
  - Every rejected move leaves tree and history untouched
  - Employee identities survive history traversal

Run:  py -3 -m org_chart.test_scenarios
"""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from org_chart.engine import OrgChartApp, bootstrap
from org_chart.transitions import InvalidMoveError
from org_chart.domain_types import NotFoundError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SAMPLE_ROOT = "Mark Zuckerberg"
SAMPLE_EMPLOYEES = [
    "Sarah Donald", "Tyler Simpson", "Bruce Willis", "Georgina Flangy",
    "Cassandra Reynolds", "Mary Blue", "Tina Teff", "Will Turner",
    "Harry Tobs", "Thomas Brown", "George Carrey", "Gary Styles",
    "Sophie Turner", "Bob Saget",
]
SAMPLE_EDGES = [
    ("Mark Zuckerberg", "Sarah Donald"),
    ("Mark Zuckerberg", "Tyler Simpson"),
    ("Mark Zuckerberg", "Bruce Willis"),
    ("Mark Zuckerberg", "Georgina Flangy"),
    ("Sarah Donald", "Cassandra Reynolds"),
    ("Cassandra Reynolds", "Mary Blue"),
    ("Cassandra Reynolds", "Bob Saget"),
    ("Bob Saget", "Tina Teff"),
    ("Tina Teff", "Will Turner"),
    ("Tyler Simpson", "Harry Tobs"),
    ("Tyler Simpson", "George Carrey"),
    ("Tyler Simpson", "Gary Styles"),
    ("Harry Tobs", "Thomas Brown"),
    ("Georgina Flangy", "Sophie Turner"),
]

# ids follow registration order: root first, then SAMPLE_EMPLOYEES
MARK, SARAH, TYLER, BRUCE, GEORGINA, CASSANDRA, MARY, TINA, WILL = range(1, 10)
HARRY, THOMAS, GEORGE, GARY, SOPHIE, BOB = range(10, 16)


def _sample_org() -> OrgChartApp:
    return bootstrap(SAMPLE_ROOT, SAMPLE_EMPLOYEES, SAMPLE_EDGES)


def _rxy_org() -> OrgChartApp:
    """R(1) -> X(2) -> Y(3)."""
    return bootstrap("R", ["X", "Y"], [("R", "X"), ("X", "Y")])


def _sup(org: OrgChartApp, eid: int):
    return org.store.adjacency_of(eid).supervisor_id


def _subs(org: OrgChartApp, eid: int):
    return org.store.adjacency_of(eid).subordinate_ids


def _assert_rejected(org: OrgChartApp, employee_id, supervisor_id, reason: str) -> None:
    before = org.snapshot()
    history_len = len(org.history)
    cursor = org.history.cursor
    try:
        org.move(employee_id, supervisor_id)
    except InvalidMoveError as exc:
        assert exc.reason == reason, f"expected {reason!r}, got {exc.reason!r}"
    else:
        raise AssertionError(f"move({employee_id}, {supervisor_id}) should fail")
    assert org.snapshot() == before
    assert len(org.history) == history_len
    assert org.history.cursor == cursor


# ---------------------------------------------------------------------------
# Root -> X -> Y
# ---------------------------------------------------------------------------

def test_rxy_move_then_undo():
    org = _rxy_org()
    assert _subs(org, 1) == [2]
    assert _subs(org, 2) == [3]

    record = org.move(3, 1)
    assert record.label == "3-1"
    assert _sup(org, 3) == 1
    assert _subs(org, 2) == []
    assert sorted(_subs(org, 1)) == [2, 3]

    assert org.undo() is True
    assert _sup(org, 3) == 2
    assert _subs(org, 2) == [3]
    assert _subs(org, 1) == [2]


def test_move_under_current_supervisor_extracts_employee():
    org = _rxy_org()
    record = org.move(2, 1)
    assert record.promoted_ids == (3,)
    assert _sup(org, 2) == 1
    assert _subs(org, 2) == []
    assert _sup(org, 3) == 1
    assert _subs(org, 1) == [3, 2]


# ---------------------------------------------------------------------------
# Move semantics
# ---------------------------------------------------------------------------

def test_move_promotes_reports_to_old_supervisor():
    org = _sample_org()
    assert _sup(org, TINA) == BOB
    assert _subs(org, TINA) == [WILL]

    record = org.move(TINA, GEORGINA)

    assert record.old_supervisor_id == BOB
    assert record.new_supervisor_id == GEORGINA
    assert record.promoted_ids == (WILL,)
    assert _sup(org, TINA) == GEORGINA
    assert _subs(org, TINA) == []
    assert _subs(org, BOB) == [WILL]
    assert _sup(org, WILL) == BOB
    assert _subs(org, GEORGINA) == [SOPHIE, TINA]


def test_promoted_reports_follow_remaining_siblings():
    org = _sample_org()
    org.move(TYLER, BRUCE)
    assert _subs(org, MARK) == [SARAH, BRUCE, GEORGINA, HARRY, GEORGE, GARY]
    for eid in (HARRY, GEORGE, GARY):
        assert _sup(org, eid) == MARK
    assert _subs(org, BRUCE) == [TYLER]


def test_object_view_tracks_adjacency():
    org = _sample_org()
    org.move(CASSANDRA, TYLER)
    org.move(HARRY, SOPHIE)
    org.undo()
    snapshot = org.snapshot()
    for employee in org.registry:
        assert [s.id for s in employee.subordinates] == snapshot[employee.id].subordinate_ids
    assert org.current_tree().id == MARK


def test_move_by_name():
    org = _sample_org()
    record = org.move_by_name("Tina Teff", "Georgina Flangy")
    assert record.label == f"{TINA}-{GEORGINA}"
    try:
        org.move_by_name("Nobody", "Georgina Flangy")
    except NotFoundError as exc:
        assert exc.kind == "name"
    else:
        raise AssertionError("unknown name should raise NotFoundError")


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

def test_undo_redo_round_trip():
    org = _sample_org()
    before = org.snapshot()
    org.move(TINA, GEORGINA)
    after = org.snapshot()
    assert after != before

    assert org.undo() is True
    assert org.snapshot() == before
    assert org.redo() is True
    assert org.snapshot() == after


def test_multi_step_undo_walks_back_in_order():
    org = _sample_org()
    states = [org.state_hash()]
    for employee_id, supervisor_id in [(TINA, GEORGINA), (HARRY, BRUCE), (MARY, SOPHIE)]:
        org.move(employee_id, supervisor_id)
        states.append(org.state_hash())

    for expected in reversed(states[:-1]):
        assert org.undo() is True
        assert org.state_hash() == expected
    assert org.undo() is False

    for expected in states[1:]:
        assert org.redo() is True
        assert org.state_hash() == expected
    assert org.redo() is False


def test_new_move_after_undo_discards_redo():
    org = _sample_org()
    org.move(TINA, GEORGINA)
    org.undo()
    org.move(HARRY, BRUCE)
    after_b = org.snapshot()

    assert org.redo() is False
    assert org.snapshot() == after_b
    assert org.history.labels() == ["bootstrap", f"{HARRY}-{BRUCE}"]


def test_undo_at_bootstrap_is_noop():
    org = _sample_org()
    before = org.snapshot()
    assert org.undo() is False
    assert org.undo() is False
    assert org.snapshot() == before
    assert org.history.cursor == 0


def test_redo_at_newest_is_noop():
    org = _sample_org()
    org.move(TINA, GEORGINA)
    after = org.snapshot()
    assert org.redo() is False
    assert org.snapshot() == after
    assert org.history.cursor == 1


def test_identities_stable_across_history():
    org = _sample_org()
    tina = org.registry.resolve(TINA)
    org.move(TINA, GEORGINA)
    org.undo()
    org.redo()
    assert org.registry.resolve(TINA) is tina
    assert tina.name == "Tina Teff"
    assert len(org.registry) == 15


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------

def test_cycle_rejected():
    org = bootstrap("Root", ["A", "B"], [("Root", "A"), ("A", "B")])
    _assert_rejected(org, 2, 3, "cycle")


def test_deep_descendant_rejected():
    org = _sample_org()
    _assert_rejected(org, SARAH, WILL, "cycle")


def test_root_cannot_move():
    org = _sample_org()
    _assert_rejected(org, MARK, SARAH, "move_root")


def test_self_supervision_rejected():
    org = _sample_org()
    _assert_rejected(org, TINA, TINA, "self_supervision")


def test_unknown_ids_rejected():
    org = _sample_org()
    _assert_rejected(org, 99, MARK, "unknown_employee")
    _assert_rejected(org, TINA, 99, "unknown_supervisor")


def test_rejection_after_undo_keeps_redo():
    org = _sample_org()
    org.move(TINA, GEORGINA)
    org.undo()
    _assert_rejected(org, MARK, TINA, "move_root")
    assert org.redo() is True


def test_move_before_seal_raises():
    org = OrgChartApp("Root")
    a = org.hire("A")
    org.assign(a.id, 1)
    try:
        org.move(a.id, 1)
    except RuntimeError:
        pass
    else:
        raise AssertionError("move before seal() should raise RuntimeError")


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

_pass = 0
_fail = 0


def _test(name, fn):
    global _pass, _fail
    try:
        fn()
        print(f"  [PASS] {name}")
        _pass += 1
    except Exception as exc:
        print(f"  [FAIL] {name}: {exc}")
        _fail += 1


def main():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            _test(name, fn)
    print(f"\n{_pass} passed, {_fail} failed")
    if _fail > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
