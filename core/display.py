"""
core/display.py
---------------
Terminal display buffer and the tagged output lines written into it.

Producers decide whether a line is plain text (typed character by
character) or rich markup (inserted whole); nothing inspects the content
to guess.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence

NAV_COMMANDS: Sequence[str] = (
    "help",
    "welcome",
    "about",
    "projects",
    "skills",
    "experience",
    "contact",
    "clear",
)


class LineKind(str, Enum):
    HEADER = "header"
    ECHO = "echo"
    PLAIN = "plain"
    RICH = "rich"


@dataclass(frozen=True)
class OutputLine:
    kind: LineKind
    content: str


def plain(text: str) -> List[OutputLine]:
    """Split text into plain lines, one per newline-separated segment."""
    return [OutputLine(LineKind.PLAIN, part) for part in text.split("\n")]


def rich(markup: str) -> OutputLine:
    return OutputLine(LineKind.RICH, markup)


@dataclass
class DisplayEntry:
    id: int
    kind: LineKind
    content: str
    text: str = ""
    speed: int = 0
    done: bool = False

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


class DisplayBuffer:
    """
    Ordered display entries behind a fixed header block.

    The header (the nav bar) survives ``clear()``; everything else goes.
    """

    def __init__(self, header: Iterable[str] = NAV_COMMANDS):
        nav = " | ".join(header)
        self._entries: List[DisplayEntry] = [
            DisplayEntry(id=0, kind=LineKind.HEADER, content=nav, text=nav, done=True)
        ]
        self._next_id = 1

    def append(self, kind: LineKind, content: str, speed: int = 0) -> DisplayEntry:
        entry = DisplayEntry(id=self._next_id, kind=kind, content=content, speed=speed)
        self._next_id += 1
        self._entries.append(entry)
        return entry

    def append_echo(self, command: str) -> DisplayEntry:
        escaped = html.escape(command, quote=False)
        entry = self.append(LineKind.ECHO, escaped)
        entry.text = escaped
        entry.done = True
        return entry

    def clear(self) -> None:
        self._entries = [e for e in self._entries if e.kind is LineKind.HEADER]

    @property
    def entries(self) -> List[DisplayEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self, after_id: int = -1) -> List[Dict[str, Any]]:
        return [e.as_dict() for e in self._entries if e.id > after_id]
