"""Process control blocks for scripts run by the shell."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field

MAX_PAGES = 10

_pids = itertools.count(1)


def _empty_page_table() -> list[int]:
    return [-1] * MAX_PAGES


@dataclass
class PCB:
    """State of one script being run: its progress, priority and page table."""

    pid: int = 0
    position: int = 0
    length: int = 0
    current_instruction: int = 0
    script_name: str = ""
    count: int = 0
    age: int = 0
    page_table: list[int] = field(default_factory=_empty_page_table)
    pages_max: int = 0


def create_pcb(script_name: str, length: int, position: int) -> PCB:
    """Create a PCB with a fresh pid, starting at the script's first line."""
    return PCB(
        pid=next(_pids),
        position=position,
        length=length,
        current_instruction=0,
        script_name=script_name,
        count=length,
        age=length,
        pages_max=0,
    )