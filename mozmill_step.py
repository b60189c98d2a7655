# mozmill_step.py
# Example step file: mozmillci run --step mozmill_step.py
from __future__ import annotations

from mozmillci import mozmill


def step():
    return mozmill(
        "tests/functional/",
        logfile="mozmill.log",
        port=24242,
        show_errors=True,
    )
