# pagedshell

`pagedshell` is a small interactive shell built around a simulated memory
system. Scripts are not run straight from disk: they are split into pages of
three lines, loaded into a fixed-size frame store, and run by a scheduler that
supports several policies. When a page a process needs is not resident, a page
fault occurs and, if no frame is free, the least recently used frame is
evicted.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Starting the shell

```
pagedshell
pagedshell --framesize 18 --varmemsize 10
```

`--framesize` is the number of lines the frame store holds (default 3, at
least 3; it is divided into frames of three lines) and `--varmemsize` is the
number of slots in the variable store (default 10). On start the shell prints
`Frame Store Size = N; Variable Store Size = M`.

When standard input is a terminal the shell shows a `$ ` prompt; when input is
piped in, no prompt is shown:

```
printf 'set x hello\nprint x\n' | pagedshell
```

Once piped input runs out, the shell goes on reading from `/dev/tty` with a
prompt; if no terminal can be opened it exits with status 0.

Several commands may be written on one line separated by `;` (up to ten per
line), and each command accepts at most ten words.

## Commands

| Command | What it does |
| --- | --- |
| `help` | Lists the commands |
| `quit` | Prints `Bye!` and leaves the shell |
| `set VAR VALUE` | Stores the single word `VALUE` under `VAR` in the variable store |
| `print VAR` | Prints the value of `VAR`, or `Variable does not exist` |
| `echo TOKEN` | Prints `TOKEN`; `echo $VAR` prints the value of `VAR`, or an empty line if it is unset |
| `source SCRIPT` | Loads `SCRIPT` into the frame store and runs it first-come first-served |
| `exec P1 [P2 ...] POLICY [#]` | Loads the programs and runs them under `POLICY` |
| `my_ls` | Lists the current directory, `.` and `..` included, sorted by name |
| `my_mkdir DIR` | Creates a directory; `my_mkdir $VAR` uses the value of `VAR`, which must be set and alphanumeric |
| `my_touch FILE` | Creates `FILE` if it does not exist |
| `my_cd DIR` | Changes directory; `DIR` must be alphanumeric and must exist |
| `run PROGRAM ARGS...` | Runs an external program and waits for it |

Unrecognised commands, or commands with the wrong number of words, print
`Unknown Command`. A script that cannot be opened prints
`Bad command: File not found`. A full variable store, or a directory that
cannot be created, is reported on standard error.

## Scheduling policies

`exec` takes one of these policies as its last word, optionally followed by
`#`:

- `FCFS` – each program runs to completion in the order given.
- `SJF` – programs are ordered by length, shortest first, and each runs to
  completion.
- `RR` – round robin with a time slice of two instructions.
- `RR30` – round robin with a time slice of thirty instructions.
- `AGING` – programs are ordered by length; after every instruction the age of
  each waiting program drops by one. A program that hits a page fault is put
  back ahead of the first waiting program that is older than it.

## Paging

Each page holds three lines of a script, and a script can have at most ten
pages. When a program is loaded, its first two pages (or one, if it is short
or the frame store holds a single frame) are placed in free frames, or in the
least recently used frame when none is free. Running an instruction on a page
that is not resident prints `Page fault!`; if no frame is free, the least
recently used frame is chosen as the victim, its lines are printed between
`Victim page contents:` and `End of victim page contents.`, and the required
page is loaded in its place. The faulting process goes back to its ready queue
and resumes later. Pages of finished scripts stay in the frame store until they
are evicted.

## Using it from Python

The pieces of the shell can also be driven directly:

```python
import sys

from pagedshell.interpreter import Interpreter
from pagedshell.memory import ShellMemory
from pagedshell.queues import ReadyQueues
from pagedshell.shell import parse_input

memory = ShellMemory(18, 10)
interpreter = Interpreter(memory, ReadyQueues(), sys.stdout)

parse_input(interpreter, "set greeting hello; print greeting")
```

- `pagedshell.memory.ShellMemory` holds the variable store and the frame store.
- `pagedshell.queues.ReadyQueues` keeps one ready queue per `Policy`
  (`RR` and `RR30` share one).
- `pagedshell.pcb.PCB` and `create_pcb` describe a loaded script.
- `pagedshell.scheduler.Scheduler` runs queued processes and handles page
  faults.
- `pagedshell.interpreter.Interpreter` carries out individual commands;
  `interpret` takes a list of words and returns 0 or the command's status.
- `pagedshell.shell.parse_input` runs a whole input line, and
  `pagedshell.shell.main` is the `pagedshell` command.

## What it does not do

The `#` after an `exec` policy is accepted but has no effect: programs always
run in the foreground, and the shell waits for them to finish before reading
the next line. There is no job control, piping or redirection.