"""
core/interpreter.py
-------------------
Terminal command interpreter.

One command runs at a time. Commands submitted while another one is still
producing output (or waiting on an edit prompt) wait in a FIFO queue and
run in submission order once the current command has finished typing.

Dispatch order
--------------
1. System messages (posted by ``connect()``), typed as-is.
2. ``sudo update <section> <action>`` runs the privileged edit flow.
3. Registry commands; their lines are typed one after another.
4. Anything else non-blank: ``bash: command not found: <command>``.
5. Blank input: nothing.

Every non-blank user command is pushed onto the history and echoed
(HTML-escaped) before dispatch.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Sequence, Tuple, Union

from core import config
from core.commands import CommandRegistry
from core.content_store import ContentLoadError, ContentStore
from core.credentials import CredentialStore
from core.display import DisplayBuffer, LineKind, OutputLine, plain, rich
from core.privileged_edit import Flow, PrivilegedEditFlow, Prompt, Say
from core.scheduler import ManualScheduler, Scheduler
from core.typing_renderer import TypingRenderer
from database.documents import StoreError, StoreUnavailable

SYSTEM_PREFIX = "_SYSTEM_:"

NOT_CONFIGURED_BANNER = (
    "<span class='text-yellow-400'>Notice: Database not configured. "
    "Using default content. Changes will not be saved.</span>"
)
CONNECTED_BANNER = "<span class='text-green-400'>Connection successful. Live content loaded.</span>"
FAILED_BANNER = (
    "<span class='text-red-500'>Critical Error: Could not connect to the database. "
    "Using default content.</span>"
)
UNREACHABLE_BANNER = (
    "<span class='text-red-500'>Critical Error: Could not reach the document store. "
    "This may be due to missing credentials, security policies or the table not being created. "
    "Please verify your setup or run the 'troubleshoot' command. Using default content.</span>"
)


def normalize_command(raw: str) -> str:
    """Input-surface normalisation: trimmed, lower-cased."""
    return raw.strip().lower()


class InterpreterState(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"


class NoPendingPrompt(RuntimeError):
    """An answer arrived while no prompt was waiting."""


@dataclass(frozen=True)
class QueuedCommand:
    text: str
    system_lines: Optional[Tuple[OutputLine, ...]] = None

    @property
    def is_system(self) -> bool:
        return self.system_lines is not None


class CommandHistory:
    """Submitted commands, most recent first, with an input-recall cursor."""

    def __init__(self) -> None:
        self.entries: List[str] = []
        self._index = -1

    def push(self, command: str) -> None:
        self.entries.insert(0, command)
        self._index = -1

    def previous(self) -> Optional[str]:
        """Step back; None means nothing to recall."""
        if self._index < len(self.entries) - 1:
            self._index += 1
        return self.entries[self._index] if self._index >= 0 else None

    def next(self) -> str:
        """Step forward; past the newest entry the input is empty again."""
        if self._index > 0:
            self._index -= 1
            return self.entries[self._index]
        self._index = -1
        return ""


class CommandInterpreter:
    def __init__(
        self,
        content_store: ContentStore,
        credentials: Optional[CredentialStore] = None,
        scheduler: Optional[Scheduler] = None,
        speed: int = config.TYPING_SPEED_MS,
    ):
        self.content_store = content_store
        self.credentials = credentials or CredentialStore(content_store.store)
        self.scheduler = scheduler or ManualScheduler()
        self.speed = speed

        self.display = DisplayBuffer()
        self.renderer = TypingRenderer(self.display, self.scheduler)
        self.registry = CommandRegistry(lambda: self.content_store.content)
        self.editor = PrivilegedEditFlow(content_store, self.credentials)
        self.history = CommandHistory()

        self.queue: Deque[QueuedCommand] = deque()
        self.state = InterpreterState.IDLE
        self.pending_prompt: Optional[Prompt] = None
        self._flow: Optional[Flow] = None
        self._pumping = False
        self._closed = False

    # -----------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------
    def start(self, connect: bool = True) -> None:
        """Greet, then connect to the document store."""
        self.submit("welcome")
        if connect:
            self.connect()

    def connect(self) -> bool:
        """
        Sign in and load content, reporting progress as system lines.

        Returns True when live content was loaded.
        """
        store = self.content_store.store
        if store is None:
            self.post_system([*plain(""), rich(NOT_CONFIGURED_BANNER)])
            return False

        self.post_system("\nConnecting to database...")
        try:
            store.sign_in()
            self.content_store.load_content()
        except (StoreError, ContentLoadError) as e:
            cause = e if isinstance(e, StoreError) else e.__cause__
            banner = UNREACHABLE_BANNER if isinstance(cause, StoreUnavailable) else FAILED_BANNER
            print(f"[Interpreter] ⚠️ Connection failed: {type(e).__name__}: {e}")
            self.post_system([rich(banner)])
            return False

        self.post_system([rich(CONNECTED_BANNER)])
        return True

    def close(self) -> None:
        """Drop queued work and abandon any edit in progress."""
        self._closed = True
        self.queue.clear()
        self.pending_prompt = None
        if self._flow is not None:
            self._flow.close()
            self._flow = None
        self.state = InterpreterState.IDLE

    @property
    def closed(self) -> bool:
        return self._closed

    # -----------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------
    def submit(self, command: str) -> None:
        self._enqueue(QueuedCommand(command))

    def post_system(self, message: Union[str, Sequence[OutputLine]]) -> None:
        lines = plain(message) if isinstance(message, str) else list(message)
        text = message if isinstance(message, str) else "\n".join(line.content for line in lines)
        self._enqueue(QueuedCommand(SYSTEM_PREFIX + text, tuple(lines)))

    def answer_prompt(self, answer: Optional[str]) -> None:
        """Resume the edit flow; ``None`` cancels the prompt."""
        if self.pending_prompt is None:
            raise NoPendingPrompt("No prompt is waiting for an answer.")
        self.pending_prompt = None
        self._advance_flow(answer)

    # -----------------------------------------------------------------
    # State machine
    # -----------------------------------------------------------------
    def _enqueue(self, entry: QueuedCommand) -> None:
        if self._closed:
            return
        self.queue.append(entry)
        self._pump()

    def _pump(self) -> None:
        if self._pumping:
            return
        self._pumping = True
        try:
            while self.state is InterpreterState.IDLE and self.queue and not self._closed:
                self._start(self.queue.popleft())
        finally:
            self._pumping = False

    def _complete(self) -> None:
        if self._closed:
            return
        self.state = InterpreterState.IDLE
        self._pump()

    def _start(self, entry: QueuedCommand) -> None:
        self.state = InterpreterState.PROCESSING

        if entry.is_system:
            self.renderer.render_all(entry.system_lines, self.speed, self._complete)
            return

        command = entry.text
        if not command.strip():
            self._complete()
            return

        self.history.push(command)
        self.display.append_echo(command)

        tokens = command.split()
        base = tokens[0]

        if base == "sudo" and len(tokens) > 1 and tokens[1] == "update":
            self._flow = self.editor.run(tokens[2:])
            self._advance_flow(None)
        elif base in self.registry:
            cmd = self.registry.get(base)
            if cmd.clears_display:
                self.display.clear()
            lines = cmd.run()
            if lines:
                self.renderer.render_all(lines, self.speed, self._complete)
            else:
                self._complete()
        else:
            self.renderer.render(OutputLine(LineKind.PLAIN, f"bash: command not found: {command}"), self.speed, self._complete)

    def _advance_flow(self, value: Optional[str]) -> None:
        if self._flow is None:
            return
        try:
            step = self._flow.send(value)
        except StopIteration:
            self._flow = None
            self._complete()
            return
        except Exception:
            self._flow = None
            self._complete()
            raise

        if isinstance(step, Prompt):
            self.pending_prompt = step
        elif isinstance(step, Say):
            self.renderer.render_all(step.lines, self.speed, lambda: self._advance_flow(None))
