"""Frame store and variable store of the shell, with demand paging support."""

from __future__ import annotations

import re
from dataclasses import dataclass

PAGE_SIZE = 3
DEFAULT_FRAME_SIZE = 3
DEFAULT_VAR_MEM_SIZE = 10
MAX_USER_INPUT = 1000
NOT_FOUND = "Variable does not exist"

_SCRIPT_LINE = re.compile(r"([^0-9]+)([0-9]+)")
_LINE_END = re.compile(r"[\r\n]")


class VariableMemoryFull(Exception):
    """Raised when no slot is left in the variable store."""


@dataclass
class _Slot:
    var: str
    value: str


@dataclass(frozen=True)
class _FrameOwner:
    script_name: str
    page: int


class ShellMemory:
    """Fixed-size variable store plus a paged frame store holding script lines."""

    def __init__(self, frame_size: int = DEFAULT_FRAME_SIZE,
                 var_mem_size: int = DEFAULT_VAR_MEM_SIZE) -> None:
        if frame_size < PAGE_SIZE:
            raise ValueError(f"frame store must hold at least {PAGE_SIZE} lines")
        if var_mem_size < 0:
            raise ValueError("variable store size must not be negative")
        self.frame_size = frame_size
        self.var_mem_size = var_mem_size
        self.frame_count = frame_size // PAGE_SIZE
        self._vars: list[_Slot | None] = [None] * var_mem_size
        self._frames: list[_Slot | None] = [None] * (self.frame_count * PAGE_SIZE)
        self._owners: list[_FrameOwner | None] = [None] * self.frame_count
        self._access_time = [-1] * self.frame_count
        self._lru_counter = 0

    def _check_frame(self, frame: int) -> None:
        if not 0 <= frame < self.frame_count:
            raise IndexError(f"Invalid frame number: {frame}")

    def _frame_slots(self, frame: int) -> range:
        start = frame * PAGE_SIZE
        return range(start, start + PAGE_SIZE)

    def get_value(self, var: str | None) -> str:
        """Look up a variable, or a script line keyed as script name plus line number."""
        if var is None:
            return NOT_FOUND
        for slot in self._vars:
            if slot is not None and slot.var == var:
                return slot.value
        match = _SCRIPT_LINE.match(var)
        if match:
            wanted = _FrameOwner(match.group(1), int(match.group(2)) // PAGE_SIZE)
            offset = int(match.group(2)) % PAGE_SIZE
            for frame, owner in enumerate(self._owners):
                if owner == wanted:
                    slot = self._frames[frame * PAGE_SIZE + offset]
                    if slot is not None:
                        return slot.value
        return NOT_FOUND

    def set_value(self, var: str, value: str) -> None:
        """Store a variable, overwriting it if present."""
        for slot in self._vars:
            if slot is not None and slot.var == var:
                slot.value = value
                return
        for index, slot in enumerate(self._vars):
            if slot is None:
                self._vars[index] = _Slot(var, value)
                return
        raise VariableMemoryFull("Error: Variable memory is full")

    def remove_value(self, script: str | None, length: int) -> None:
        """Drop a finished script's entries from both stores."""
        if script is None:
            return
        for index, slot in enumerate(self._vars):
            if slot is not None and slot.var == f"{script}{index}":
                self._vars[index] = None
        for frame, owner in enumerate(self._owners):
            if owner is not None and owner.script_name == script:
                self.clear_frame(frame)
                self.update_frame_owner(frame, None, -1)

    def find_free_frame(self) -> int | None:
        """Return the first frame whose slots are all empty, or None."""
        return next(
            (frame for frame in range(self.frame_count)
             if all(self._frames[i] is None for i in self._frame_slots(frame))),
            None,
        )

    def find_lru_frame(self) -> int:
        """Return a never-used frame, else the least recently used one."""
        if -1 in self._access_time:
            return self._access_time.index(-1)
        return self._access_time.index(min(self._access_time))

    def load_line_to_frame(self, frame: int, offset: int, line: str | None,
                           script_name: str | None, page: int) -> None:
        """Put one script line into a frame slot and mark the frame as used."""
        if script_name is None:
            return
        self._check_frame(frame)
        if not 0 <= offset < PAGE_SIZE:
            raise IndexError(f"Invalid offset: {offset}")
        clean = (line or "")[:MAX_USER_INPUT - 1]
        clean = _LINE_END.split(clean, maxsplit=1)[0]
        key = f"{script_name}{page * PAGE_SIZE + offset}"
        self._frames[frame * PAGE_SIZE + offset] = _Slot(key, clean)
        self.update_frame_owner(frame, script_name, page)
        self.update_frame_access_time(frame)

    def update_frame_access_time(self, frame: int) -> None:
        """Stamp a frame as just used; out-of-range frames are ignored."""
        if 0 <= frame < self.frame_count:
            self._access_time[frame] = self._lru_counter
            self._lru_counter += 1

    def update_frame_owner(self, frame: int, script_name: str | None, page: int) -> None:
        """Record which script page a frame holds; None clears the owner."""
        if not 0 <= frame < self.frame_count:
            return
        self._owners[frame] = (
            _FrameOwner(script_name, page) if script_name is not None else None
        )

    def clear_frame(self, frame: int) -> None:
        """Empty every slot of a frame."""
        self._check_frame(frame)
        for index in self._frame_slots(frame):
            self._frames[index] = None

    def frame_line(self, frame: int, offset: int) -> str | None:
        """Return the line held in a frame slot, or None if the slot is empty."""
        self._check_frame(frame)
        if not 0 <= offset < PAGE_SIZE:
            raise IndexError(f"Invalid offset: {offset}")
        slot = self._frames[frame * PAGE_SIZE + offset]
        return slot.value if slot is not None else None