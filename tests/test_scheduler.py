import io

import pytest

from pagedshell.memory import ShellMemory
from pagedshell.pcb import create_pcb
from pagedshell.queues import Policy, ReadyQueues
from pagedshell.scheduler import Scheduler


def _script(tmp_path, name, lines):
    path = tmp_path / name
    path.write_text("".join(f"{line}\n" for line in lines))
    return str(path)


def _setup(frame_size):
    memory = ShellMemory(frame_size=frame_size, var_mem_size=10)
    queues = ReadyQueues()
    commands = []
    out = io.StringIO()
    scheduler = Scheduler(memory, queues, commands.append, out)
    return scheduler, queues, commands, out


def test_fcfs_runs_all_lines_after_page_fault(tmp_path):
    scheduler, queues, commands, out = _setup(3)
    path = _script(tmp_path, "prog", ["echo a", "echo b"])
    queues.enqueue(create_pcb(path, 2, 0), Policy.FCFS)
    scheduler.run()
    assert commands == ["echo a", "echo b"]
    assert out.getvalue() == "Page fault! \n"
    assert queues.is_empty(Policy.FCFS)


def test_run_uses_sjf_queue_when_fcfs_empty(tmp_path):
    scheduler, queues, commands, _ = _setup(3)
    path = _script(tmp_path, "prog", ["x", "y"])
    queues.enqueue(create_pcb(path, 2, 0), Policy.SJF)
    scheduler.run()
    assert commands == ["x", "y"]
    assert queues.is_empty(Policy.SJF)


def test_execute_instruction_reports_fault_then_advances(tmp_path):
    scheduler, _, commands, _ = _setup(3)
    path = _script(tmp_path, "prog", ["first", "second"])
    pcb = create_pcb(path, 2, 0)
    assert scheduler.execute_instruction(pcb) is None
    assert pcb.page_table[0] == 0
    assert commands == []
    assert scheduler.execute_instruction(pcb) == 1
    assert commands == ["first"]


def test_blank_lines_are_skipped(tmp_path):
    scheduler, queues, commands, _ = _setup(3)
    path = _script(tmp_path, "prog", ["a", "", "b"])
    pcb = create_pcb(path, 3, 0)
    queues.enqueue(pcb, Policy.FCFS)
    scheduler.run()
    assert commands == ["a", "b"]
    assert pcb.current_instruction == pcb.length


def test_eviction_prints_victim_page(tmp_path):
    scheduler, queues, commands, out = _setup(3)
    path = _script(tmp_path, "prog", ["l0", "l1", "l2", "l3"])
    pcb = create_pcb(path, 4, 0)
    queues.enqueue(pcb, Policy.FCFS)
    scheduler.run()
    assert commands == ["l0", "l1", "l2", "l3"]
    assert ("Page fault! Victim page contents:\n\nl0\nl1\nl2\n"
            "\nEnd of victim page contents.\n") in out.getvalue()
    assert pcb.page_table[0] == -1
    assert pcb.page_table[1] == 0


def test_page_fault_on_missing_script(tmp_path):
    scheduler, _, _, out = _setup(3)
    missing = str(tmp_path / "absent")
    pcb = create_pcb(missing, 1, 0)
    scheduler.handle_page_fault(pcb, 0)
    assert out.getvalue() == f"Page fault! \nFailed to open script file {missing}\n"
    assert pcb.page_table[0] == -1


def test_round_robin_interleaves_processes(tmp_path):
    scheduler, queues, commands, _ = _setup(6)
    a = _script(tmp_path, "a", ["a1", "a2", "a3"])
    b = _script(tmp_path, "b", ["b1", "b2"])
    queues.enqueue(create_pcb(a, 3, 0), Policy.RR)
    queues.enqueue(create_pcb(b, 2, 0), Policy.RR)
    scheduler.run_round_robin(2)
    assert commands == ["a1", "a2", "b1", "b2", "a3"]
    assert queues.is_empty(Policy.RR)


def test_long_time_slice_runs_each_process_whole(tmp_path):
    scheduler, queues, commands, _ = _setup(6)
    a = _script(tmp_path, "a", ["a1", "a2", "a3"])
    b = _script(tmp_path, "b", ["b1", "b2"])
    queues.enqueue(create_pcb(a, 3, 0), Policy.RR30)
    queues.enqueue(create_pcb(b, 2, 0), Policy.RR30)
    scheduler.run_round_robin(30)
    assert commands == ["a1", "a2", "a3", "b1", "b2"]


def test_aging_runs_and_ages_waiting_process(tmp_path):
    scheduler, queues, commands, _ = _setup(6)
    a = _script(tmp_path, "a", ["a1", "a2", "a3"])
    b = _script(tmp_path, "b", ["b1", "b2"])
    pcb_a = create_pcb(a, 3, 0)
    pcb_b = create_pcb(b, 2, 0)
    queues.enqueue(pcb_a, Policy.AGING)
    queues.enqueue(pcb_b, Policy.AGING)
    scheduler.run_aging()
    assert commands == ["a1", "a2", "a3", "b1", "b2"]
    assert pcb_b.age == 0
    assert queues.is_empty(Policy.AGING)


def test_most_recent_frame_is_not_lru(tmp_path):
    scheduler, queues, _, _ = _setup(6)
    a = _script(tmp_path, "a", ["a1"])
    b = _script(tmp_path, "b", ["b1"])
    pcb_a = create_pcb(a, 1, 0)
    pcb_b = create_pcb(b, 1, 0)
    queues.enqueue(pcb_a, Policy.FCFS)
    queues.enqueue(pcb_b, Policy.FCFS)
    scheduler.run()
    assert scheduler.memory.find_lru_frame() == pcb_a.page_table[0]
    assert pcb_a.page_table[0] != pcb_b.page_table[0]


def test_empty_queue_dequeue_raises():
    _, queues, _, _ = _setup(3)
    with pytest.raises(IndexError):
        queues.dequeue(Policy.RR)