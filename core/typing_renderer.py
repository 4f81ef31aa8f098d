"""
core/typing_renderer.py
-----------------------
Types output lines into the display buffer.

Plain lines gain one character every ``speed`` ms and report completion
one tick after the last character. Rich lines appear whole and report
completion after ``2 * speed`` ms.
"""

from __future__ import annotations

from typing import Callable, Iterable

from core.display import DisplayBuffer, DisplayEntry, LineKind, OutputLine
from core.scheduler import Scheduler


class TypingRenderer:
    def __init__(self, display: DisplayBuffer, scheduler: Scheduler):
        self.display = display
        self.scheduler = scheduler

    def render(self, line: OutputLine, speed: int, on_done: Callable[[], None]) -> DisplayEntry:
        entry = self.display.append(line.kind, line.content, speed)

        if line.kind is LineKind.RICH:
            entry.text = line.content
            entry.done = True
            self.scheduler.call_later(speed * 2, on_done)
            return entry

        content = line.content

        def type_next(i: int) -> None:
            if i < len(content):
                entry.text += content[i]
                self.scheduler.call_later(speed, lambda: type_next(i + 1))
            else:
                entry.done = True
                on_done()

        type_next(0)
        return entry

    def render_all(self, lines: Iterable[OutputLine], speed: int, on_done: Callable[[], None]) -> None:
        """Render lines one after another; each finishes before the next starts."""
        pending = list(lines)

        def next_line() -> None:
            if not pending:
                on_done()
                return
            self.render(pending.pop(0), speed, next_line)

        next_line()
