"""Runs queued processes under FCFS/SJF, round-robin or aging policies with demand paging."""

from __future__ import annotations

import sys
from itertools import islice
from typing import Callable, TextIO

from pagedshell.memory import NOT_FOUND, PAGE_SIZE, ShellMemory
from pagedshell.pcb import PCB
from pagedshell.queues import Policy, ReadyQueues


class Scheduler:
    """Executes processes from the ready queues one instruction at a time.

    Pages are loaded on demand: an instruction on a page that is not resident
    raises a page fault, the page is brought in (evicting the least recently
    used frame if none is free) and the process goes back to its queue.
    """

    def __init__(self, memory: ShellMemory, queues: ReadyQueues,
                 run_command: Callable[[str], object],
                 out: TextIO | None = None) -> None:
        self.memory = memory
        self.queues = queues
        self.run_command = run_command
        self.out = out if out is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _evict(self, pcb: PCB) -> int:
        frame = self.memory.find_lru_frame()
        self._write("Victim page contents:\n\n")
        for offset in range(PAGE_SIZE):
            line = self.memory.frame_line(frame, offset)
            if line is not None:
                self._write(f"{line}\n")
        self._write("\nEnd of victim page contents.\n")
        self.memory.clear_frame(frame)
        pcb.page_table[:] = [-1 if entry == frame else entry for entry in pcb.page_table]
        return frame

    def handle_page_fault(self, pcb: PCB, page: int) -> None:
        """Bring one page of the process's script into a frame."""
        self._write("Page fault! ")
        frame = self.memory.find_free_frame()
        if frame is None:
            frame = self._evict(pcb)
        else:
            self._write("\n")

        try:
            script = open(pcb.script_name, encoding="utf-8", errors="replace")
        except OSError:
            self._write(f"Failed to open script file {pcb.script_name}\n")
            return

        with script:
            lines = list(islice(script, page * PAGE_SIZE, (page + 1) * PAGE_SIZE))
        for offset in range(PAGE_SIZE):
            line = lines[offset] if offset < len(lines) else ""
            self.memory.load_line_to_frame(frame, offset, line, pcb.script_name, page)
        pcb.page_table[page] = frame

    def execute_instruction(self, pcb: PCB) -> int | None:
        """Run the process's current line.

        Returns the index of the next instruction, or None when a page fault
        occurred and the instruction still has to be run.
        """
        line_num = pcb.current_instruction
        page, offset = divmod(line_num, PAGE_SIZE)
        frame = pcb.page_table[page]

        if frame == -1:
            self.handle_page_fault(pcb, page)
            return None

        self.memory.update_frame_access_time(frame)

        command = self.memory.frame_line(frame, offset)
        if command is None:
            command = self.memory.get_value(f"{pcb.script_name}{line_num}")

        if command and command != NOT_FOUND:
            self.run_command(command)
        return pcb.current_instruction + 1

    def _run_to_completion(self, pcb: PCB) -> bool:
        """Run until the process ends; False if it stopped on a page fault."""
        while pcb.current_instruction < pcb.length:
            next_instruction = self.execute_instruction(pcb)
            if next_instruction is None:
                return False
            pcb.current_instruction = next_instruction
        return True

    def run(self) -> None:
        """Run the FCFS queue, or the SJF queue if FCFS is empty, until it drains.

        A finished script's pages stay resident; they are reclaimed by eviction.
        """
        if not self.queues.is_empty(Policy.FCFS):
            policy = Policy.FCFS
        elif not self.queues.is_empty(Policy.SJF):
            policy = Policy.SJF
        else:
            policy = Policy.FCFS

        while not self.queues.is_empty(policy):
            pcb = self.queues.dequeue(policy)
            if not self._run_to_completion(pcb):
                self.queues.enqueue(pcb, policy)

    def run_round_robin(self, time_slice: int) -> None:
        """Run the round-robin queue, giving each process a slice of instructions."""
        while not self.queues.is_empty(Policy.RR):
            pcb = self.queues.dequeue(Policy.RR)
            faulted = False
            for _ in range(time_slice):
                if pcb.current_instruction >= pcb.length:
                    break
                next_instruction = self.execute_instruction(pcb)
                if next_instruction is None:
                    faulted = True
                    break
                pcb.current_instruction = next_instruction

            if faulted or pcb.current_instruction < pcb.length:
                self.queues.enqueue(pcb, Policy.RR)

    def run_aging(self) -> None:
        """Run the aging queue, aging waiting processes after every instruction."""
        while not self.queues.is_empty(Policy.AGING):
            pcb = self.queues.dequeue(Policy.AGING)
            while pcb.current_instruction < pcb.length:
                next_instruction = self.execute_instruction(pcb)
                if next_instruction is None:
                    self.queues.insert_sorted(pcb, Policy.AGING)
                    break
                pcb.current_instruction = next_instruction
                self.queues.age()