"""Built-in commands of the shell and the loader that pages scripts into memory."""

from __future__ import annotations

import os
import re
import subprocess
import sys
from typing import Callable, Iterable, TextIO

from pagedshell.memory import (
    MAX_USER_INPUT,
    NOT_FOUND,
    PAGE_SIZE,
    ShellMemory,
    VariableMemoryFull,
)
from pagedshell.pcb import PCB, create_pcb
from pagedshell.queues import Policy, ReadyQueues
from pagedshell.scheduler import Scheduler

MAX_ARGS_SIZE = 10

HELP_TEXT = (
    "COMMAND\t\t\tDESCRIPTION\n"
    " help\t\t\tDisplays all the commands\n"
    " quit\t\t\tExits / terminates the shell with \u201cBye!\u201d\n"
    " set VAR STRING\t\tAssigns a value to shell memory\n"
    " print VAR\t\tDisplays the STRING assigned to VAR\n"
    " source SCRIPT.TXT\tExecutes the file SCRIPT.TXT\n"
    " "
)

UNKNOWN_COMMAND = "Unknown Command"
FILE_NOT_FOUND = "Bad command: File not found"
NO_RUN_COMMAND = "there is no command following run"

_POLICIES = {
    "FCFS": Policy.FCFS,
    "SJF": Policy.SJF,
    "RR": Policy.RR,
    "AGING": Policy.AGING,
    "RR30": Policy.RR30,
}

_LINE_END = re.compile(r"[\r\n]")
_WORD = re.compile(r"[^ \n;]*")


class CommandError(Exception):
    """A command failed; carries the message shown and the status returned."""

    def __init__(self, message: str, code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


def _unknown_command() -> CommandError:
    return CommandError(UNKNOWN_COMMAND)


def _is_alnum(name: str) -> bool:
    return all(char.isascii() and char.isalnum() for char in name)


def _cut_line_end(text: str) -> str:
    return _LINE_END.split(text, maxsplit=1)[0]


def run_external(args: Iterable[str]) -> int:
    """Run an outside program and wait for it; returns its non-negative status."""
    argv = list(args)
    sys.stdout.flush()
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as exc:
        print(f"{argv[0]}: {exc.strerror}", file=sys.stderr)
        return 1
    return abs(completed.returncode)


class Interpreter:
    """Runs shell commands against a shell memory and the ready queues."""

    def __init__(self, memory: ShellMemory | None = None,
                 queues: ReadyQueues | None = None,
                 out: TextIO | None = None) -> None:
        self.memory = memory if memory is not None else ShellMemory()
        self.queues = queues if queues is not None else ReadyQueues()
        self.out = out if out is not None else sys.stdout
        self.scheduler = Scheduler(self.memory, self.queues, self.process_input, self.out)
        self._commands: dict[str, tuple[int | None, Callable[..., object]]] = {
            "help": (0, self.help),
            "quit": (0, self.quit),
            "set": (2, self.set),
            "print": (1, self.print_var),
            "source": (1, self.source),
            "echo": (1, self.echo),
            "my_ls": (0, self.my_ls),
            "my_mkdir": (1, self.my_mkdir),
            "my_touch": (1, self.my_touch),
            "my_cd": (1, self.my_cd),
            "exec": (None, self.exec),
        }

    def _write(self, text: str) -> None:
        self.out.write(text)

    def interpret(self, args: list[str]) -> int:
        """Run one command given as words; returns 0 on success, else its status."""
        try:
            if not 1 <= len(args) <= MAX_ARGS_SIZE:
                raise _unknown_command()
            name, *rest = (_cut_line_end(arg) for arg in args)
            entry = self._commands.get(name)
            if entry is None:
                raise _unknown_command()
            arity, handler = entry
            if arity is None:
                handler(rest)
            elif len(rest) != arity:
                raise _unknown_command()
            else:
                handler(*rest)
        except CommandError as err:
            self._write(f"{err.message}\n")
            return err.code
        return 0

    def _run_words(self, words: list[str]) -> int:
        if len(words) == 1:
            self._write(NO_RUN_COMMAND)
            return 1
        self.out.flush()
        return run_external(words[1:])

    def process_input(self, command: str) -> int:
        """Run a line of script text, which may chain commands with ';'."""
        text = command[:MAX_USER_INPUT]
        pos = len(text) - len(text.lstrip(" "))
        words: list[str] = []
        while pos < len(text) and text[pos] != "\n":
            end = _WORD.match(text, pos).end()
            words.append(text[pos:end])
            if end == len(text):
                break
            if text[end] == ";":
                if words[0] == "run":
                    return self._run_words(words)
                code = self.interpret(words)
                if code != 0:
                    return code
                words = []
                pos = end + 2
            else:
                pos = end + 1

        if words and words[0] == "run":
            return self._run_words(words)
        return self.interpret(words)

    def help(self) -> None:
        """Show the list of commands."""
        self._write(f"{HELP_TEXT}\n")

    def quit(self) -> None:
        """Say goodbye and leave the shell."""
        self._write("Bye!\n")
        self.out.flush()
        raise SystemExit(0)

    def set(self, var: str, value: str) -> None:
        """Assign a value to a shell variable."""
        try:
            self.memory.set_value(var, value)
        except VariableMemoryFull as exc:
            print(exc, file=sys.stderr)

    def print_var(self, var: str) -> None:
        """Show the value of a shell variable."""
        self._write(f"{self.memory.get_value(var)}\n")

    def echo(self, token: str) -> None:
        """Show a word, or the value of a variable when it starts with '$'."""
        if token.startswith("$"):
            value = self.memory.get_value(token[1:])
            self._write("\n" if value == NOT_FOUND else f"{value}\n")
        else:
            self._write(f"{token}\n")

    def my_ls(self) -> None:
        """List the current directory, '.' and '..' included, sorted."""
        for name in sorted([".", "..", *os.listdir(".")]):
            self._write(f"{name}\n")

    def my_mkdir(self, directory: str) -> None:
        """Create a directory, named directly or by a '$' variable."""
        if directory.startswith("$"):
            value = self.memory.get_value(directory[1:])
            if value == NOT_FOUND or not _is_alnum(value):
                raise CommandError("Bad command: my_mkdir")
            target, label = value, "mkdir failed. "
        else:
            target, label = directory, "mkdir failed"
        try:
            os.mkdir(target, 0o777)
        except OSError as exc:
            print(f"{label}: {exc.strerror}", file=sys.stderr)

    def my_touch(self, filename: str) -> None:
        """Create a file if it does not exist."""
        with open(filename, "a", encoding="utf-8"):
            pass

    def my_cd(self, directory: str) -> None:
        """Change the working directory to an alphanumeric name."""
        if not _is_alnum(directory):
            raise CommandError("Bad command: my_cd")
        try:
            os.chdir(directory)
        except OSError:
            raise CommandError("Bad command: my_cd") from None

    def load_program_as_pages(self, script: str) -> PCB:
        """Read a script and load its first pages into frames; returns its PCB."""
        with open(script, encoding="utf-8", errors="replace", newline="\n") as handle:
            lines = [_cut_line_end(line) for line in handle]

        page_count = -(-len(lines) // PAGE_SIZE)
        pcb = create_pcb(script, len(lines), 0)
        pcb.pages_max = page_count

        initial_pages = min(2 if page_count >= 2 else 1, self.memory.frame_count, page_count)
        for page in range(initial_pages):
            frame = self.memory.find_free_frame()
            if frame is None:
                frame = self.memory.find_lru_frame()
                self.memory.clear_frame(frame)
            pcb.page_table[page] = frame
            chunk = lines[page * PAGE_SIZE:(page + 1) * PAGE_SIZE]
            for offset in range(PAGE_SIZE):
                line = chunk[offset] if offset < len(chunk) else ""
                self.memory.load_line_to_frame(frame, offset, line, script, page)
        return pcb

    def source(self, script: str) -> None:
        """Run a script to completion under FCFS."""
        try:
            pcb = self.load_program_as_pages(script)
        except OSError:
            raise CommandError(FILE_NOT_FOUND, 3) from None
        self.queues.enqueue(pcb, Policy.FCFS)
        self.scheduler.run()

    def exec(self, args: list[str]) -> None:
        """Run several scripts under a policy: 'exec SCRIPT... POLICY [#]'."""
        args = list(args)
        if args and args[-1] == "#":
            args.pop()
        if not args or args[-1] not in _POLICIES:
            raise _unknown_command()
        policy = _POLICIES[args.pop()]

        try:
            pcbs = [self.load_program_as_pages(script) for script in args]
        except OSError:
            raise CommandError(FILE_NOT_FOUND, 3) from None

        if policy in (Policy.SJF, Policy.AGING):
            pcbs.sort(key=lambda pcb: pcb.length)
        for pcb in pcbs:
            self.queues.enqueue(pcb, policy)

        if policy in (Policy.RR, Policy.RR30):
            self.scheduler.run_round_robin(2 if policy is Policy.RR else 30)
        elif policy is Policy.AGING:
            self.scheduler.run_aging()
        else:
            self.scheduler.run()