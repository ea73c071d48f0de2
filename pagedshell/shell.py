"""Command-line entry of the shell: reads lines and runs them."""

from __future__ import annotations

import argparse
import contextlib
import re
import sys

from pagedshell.interpreter import NO_RUN_COMMAND, Interpreter, run_external
from pagedshell.memory import (
    DEFAULT_FRAME_SIZE,
    DEFAULT_VAR_MEM_SIZE,
    MAX_USER_INPUT,
    ShellMemory,
)
from pagedshell.queues import ReadyQueues

MAX_COMMANDS = 10
PROMPT = "$"

_WORD = re.compile(r"[^ \n;]*")


def word_ending(char: str) -> bool:
    """Whether a character ends a word."""
    return char in ("", "\0", "\n", " ", ";")


def split_words(command: str) -> list[str]:
    """Split one command into words at spaces, stopping at the end of the line."""
    text = command.split("\0", 1)[0][:MAX_USER_INPUT]
    pos = len(text) - len(text.lstrip(" "))
    words = []
    while pos < len(text) and text[pos] != "\n":
        end = _WORD.match(text, pos).end()
        words.append(text[pos:end])
        if end == len(text):
            break
        pos = end + 1
    return words


def parse_input(interpreter: Interpreter, line: str) -> int:
    """Run a line of input holding up to ten ';'-separated commands."""
    commands = [part for part in line.split(";") if part][:MAX_COMMANDS]
    code = 0
    for command in commands:
        words = split_words(command[1:] if command.startswith(" ") else command)
        if words and words[0] == "run":
            if len(words) == 1:
                interpreter.out.write(NO_RUN_COMMAND)
                return 1
            interpreter.out.flush()
            return run_external(words[1:])
        code = interpreter.interpret(words)
        if code != 0:
            return code
    return code


def main(argv: list[str] | None = None) -> int:
    """Run the shell on standard input, then on the terminal once input ends."""
    parser = argparse.ArgumentParser(prog="pagedshell")
    parser.add_argument("--framesize", type=int, default=DEFAULT_FRAME_SIZE)
    parser.add_argument("--varmemsize", type=int, default=DEFAULT_VAR_MEM_SIZE)
    options = parser.parse_args(argv)

    print(f"Frame Store Size = {options.framesize}; "
          f"Variable Store Size = {options.varmemsize}")
    try:
        memory = ShellMemory(options.framesize, options.varmemsize)
    except ValueError as exc:
        parser.error(str(exc))

    interpreter = Interpreter(memory, ReadyQueues(), sys.stdout)
    stream = sys.stdin
    batch = not stream.isatty()

    with contextlib.ExitStack() as stack:
        while True:
            if not batch:
                print(f"{PROMPT} ", end="", flush=True)
            line = stream.readline()
            if parse_input(interpreter, line) == -1:
                return 99
            if not line.endswith("\n"):
                try:
                    stream = stack.enter_context(open("/dev/tty", encoding="utf-8"))
                except OSError:
                    return 0
                batch = False


if __name__ == "__main__":
    raise SystemExit(main())