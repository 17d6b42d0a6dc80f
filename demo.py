"""Print the sample organization through a move / undo / redo cycle."""
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from org_chart.drift import compare_snapshots
from org_chart.engine import bootstrap
from org_chart.domain_types import Employee

SEED_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend", "sample_org.json")


def render(employee: Employee, indent: int = 0) -> str:
    lines = [f"{'  ' * indent}{employee.name} ({employee.id})"]
    for sub in employee.subordinates:
        lines.append(render(sub, indent + 1))
    return "\n".join(lines)


with open(SEED_FILE, "r", encoding="utf-8") as f:
    seed = json.load(f)

app = bootstrap(seed["root"], seed["employees"], [tuple(e) for e in seed["edges"]])
print(render(app.current_tree()))

steps = [
    ("move(8, 5)", lambda: app.move(8, 5)),
    ("undo()", app.undo),
    ("redo()", app.redo),
]

for title, step in steps:
    before = app.snapshot()
    step()
    diff = compare_snapshots(before, app.snapshot())
    print(f"\n=== {title}  cursor={app.history.cursor}  hash={app.state_hash()[:12]} ===")
    for eid, (old, new) in diff["moved"].items():
        print(f"  {app.registry.resolve(eid).name}: {old} -> {new}")
    print(render(app.current_tree()))
