"""Ready queues of the scheduler, one per scheduling policy."""

from __future__ import annotations

from collections import deque
from enum import IntEnum

from pagedshell.pcb import PCB


class Policy(IntEnum):
    """Scheduling policies; RR and RR30 share one queue."""

    FCFS = 0
    SJF = 1
    RR = 2
    RR30 = 3
    AGING = 4


def _queue_key(policy: Policy | int) -> Policy:
    chosen = Policy(policy)
    return Policy.RR if chosen is Policy.RR30 else chosen


class ReadyQueues:
    """The set of ready queues that processes wait in."""

    def __init__(self) -> None:
        self._queues: dict[Policy, deque[PCB]] = {
            policy: deque()
            for policy in (Policy.FCFS, Policy.SJF, Policy.RR, Policy.AGING)
        }

    def _queue(self, policy: Policy | int) -> deque[PCB]:
        return self._queues[_queue_key(policy)]

    def enqueue(self, pcb: PCB, policy: Policy | int) -> None:
        """Append a process to the tail of the policy's queue."""
        self._queue(policy).append(pcb)

    def insert_sorted(self, pcb: PCB, policy: Policy | int) -> None:
        """Put a process ahead of the first older queued process, else at the tail.

        The tail entry is never compared, and entries ahead of the one the
        process is placed before are dropped from the queue.
        """
        queue = self._queue(policy)
        queued = list(queue)
        for position, other in enumerate(queued[:-1]):
            if pcb.age < other.age:
                queue.clear()
                queue.append(pcb)
                queue.extend(queued[position:])
                return
        queue.append(pcb)

    def dequeue(self, policy: Policy | int) -> PCB:
        """Remove and return the head of the policy's queue."""
        queue = self._queue(policy)
        if not queue:
            raise IndexError("dequeue from an empty ready queue")
        return queue.popleft()

    def is_empty(self, policy: Policy | int) -> bool:
        """Whether the policy's queue holds no process."""
        return not self._queue(policy)

    def head(self, policy: Policy | int) -> PCB | None:
        """The process at the head of the policy's queue, if any."""
        queue = self._queue(policy)
        return queue[0] if queue else None

    def age(self) -> None:
        """Lower the age of every process waiting in the aging queue."""
        for pcb in self._queues[Policy.AGING]:
            if pcb.age > 0:
                pcb.age -= 1