"""Line-oriented terminal prompts for the config wizard.

A prompt shows a question, optionally followed by a numbered menu, and
reads one line of input. In menu mode the answer must be a 1-based index
into the menu (or an empty line for the default) and the question is asked
again until it is. Without a menu the raw line is returned as-is.

The output format is relied on by scripts that drive the wizard, so it is
kept byte-for-byte stable, including the trailing carriage returns.
"""

import re
import sys
from typing import Callable, Optional, Sequence, TextIO

from cwwizard.utils.debug import debug_prompt
from cwwizard.utils.exceptions import InvalidDefaultOptionError, PromptAbortedError

_INDEX_RE = re.compile(r"[+-]?[0-9]+")

YES = "yes"
NO = "no"
YES_NO = [YES, NO]


def read_line(stream: Optional[TextIO] = None) -> str:
    """Read one line from stdin without its line terminator.

    Raises:
        PromptAbortedError: The stream is closed.
    """
    line = (stream or sys.stdin).readline()
    if line == "":
        raise PromptAbortedError("input closed while waiting for an answer")
    return line.rstrip("\r\n")


def _parse_index(answer: str) -> Optional[int]:
    if not _INDEX_RE.fullmatch(answer):
        return None
    return int(answer)


class Prompter:
    """Asks questions on a text stream.

    Args:
        reader: Callable returning the next input line without its
            terminator. Defaults to reading stdin.
        output: Stream prompts are written to. Defaults to stdout,
            resolved at write time.
    """

    def __init__(
        self,
        reader: Optional[Callable[[], str]] = None,
        output: Optional[TextIO] = None,
    ):
        self.reader = reader or read_line
        self.output = output

    def _write(self, text: str) -> None:
        print(text, end="", file=self.output or sys.stdout, flush=True)

    def choice(
        self,
        question: str,
        default_option: int,
        valid_values: Optional[Sequence[str]] = None,
    ) -> str:
        """Ask a question, optionally restricted to a numbered menu.

        Args:
            question: Text shown before the menu on every attempt
            default_option: 1-based menu index picked on an empty line,
                0 for no default
            valid_values: Menu entries. Empty or None means free text.

        Returns:
            A member of valid_values, or the raw line in free-text mode.

        Raises:
            InvalidDefaultOptionError: default_option is outside the menu.
            PromptAbortedError: Input ended before a valid answer.
        """
        menu = list(valid_values or [])
        if menu and not 0 <= default_option <= len(menu):
            raise InvalidDefaultOptionError(default_option, len(menu))

        while True:
            if menu:
                options = "".join(f"{i}. {value}\n" for i, value in enumerate(menu, 1))
                self._write(
                    f"{question}\n{options}default choice: [{default_option}]:\n\r"
                )
            else:
                self._write(f"{question}\n\r")

            answer = self.reader()

            if not menu:
                return answer

            option = default_option if answer == "" else _parse_index(answer)
            if option is not None and 0 < option <= len(menu):
                return menu[option - 1]

            debug_prompt("rejected answer", question=question, answer=answer)
            self._write(
                f"The value {answer} is not valid to this question.\n"
                "Please retry to answer:\n"
            )

    def yes(self, question: str) -> bool:
        """Yes/no menu defaulting to yes. True if yes was picked."""
        return self.choice(question, 1, YES_NO) == YES

    def no(self, question: str) -> bool:
        """Yes/no menu defaulting to no. True if yes was picked."""
        return self.choice(question, 2, YES_NO) == YES

    def ask(self, question: str) -> str:
        """Free-text question, returns the line unchanged."""
        return self.choice(question, 0, None)

    def ask_with_default(self, question: str, default_value: str) -> str:
        """Free-text question that falls back to default_value on an empty line."""
        self._write(f"{question}\ndefault choice: [{default_value}]\n\r")
        answer = self.reader()
        if answer == "":
            return default_value
        return answer

    def enter_to_exit(self) -> None:
        """Wait for Enter."""
        self._write("Please press Enter to exit...\n")
        try:
            self.reader()
        except PromptAbortedError:
            # closed stdin exits the same way as Enter
            return


_default = Prompter()


def choice(
    question: str, default_option: int, valid_values: Optional[Sequence[str]] = None
) -> str:
    """Ask on stdin/stdout. See Prompter.choice."""
    return _default.choice(question, default_option, valid_values)


def yes(question: str) -> bool:
    return _default.yes(question)


def no(question: str) -> bool:
    return _default.no(question)


def ask(question: str) -> str:
    return _default.ask(question)


def ask_with_default(question: str, default_value: str) -> str:
    return _default.ask_with_default(question, default_value)


def enter_to_exit() -> None:
    _default.enter_to_exit()
