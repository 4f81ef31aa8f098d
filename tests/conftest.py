# tests/conftest.py
"""
Shared fixtures: an in-memory SQL document store and an interpreter on a
virtual clock.
"""
import pytest

from core.content_store import ContentStore
from core.credentials import CredentialStore
from core.interpreter import CommandInterpreter
from core.scheduler import ManualScheduler
from database.documents import StoreUnavailable
from database.queries import SqlDocumentStore


class FlakyStore(SqlDocumentStore):
    """SQL store whose writes (and optionally reads) can be switched off."""

    def __init__(self):
        super().__init__("sqlite://")
        self.fail_writes = False
        self.fail_reads = False

    def _fetch(self, key):
        if self.fail_reads:
            raise StoreUnavailable("reads disabled")
        return super()._fetch(key)

    def _persist(self, key, current, data):
        if self.fail_writes:
            raise StoreUnavailable("writes disabled")
        return super()._persist(key, current, data)


@pytest.fixture
def store():
    return SqlDocumentStore("sqlite://")


@pytest.fixture
def flaky_store():
    return FlakyStore()


class Terminal:
    """Interpreter plus helpers to drive it to idle and read the display."""

    def __init__(self, store, speed=1):
        self.scheduler = ManualScheduler()
        self.content_store = ContentStore(store, debug=False)
        self.credentials = CredentialStore(store)
        self.interp = CommandInterpreter(
            self.content_store, self.credentials, scheduler=self.scheduler, speed=speed
        )

    def run(self, command):
        self.interp.submit(command)
        self.scheduler.run_until_idle()

    def answer(self, value):
        self.interp.answer_prompt(value)
        self.scheduler.run_until_idle()

    @property
    def prompt(self):
        return self.interp.pending_prompt

    def texts(self, kinds=("plain", "rich", "echo")):
        return [e.text for e in self.interp.display.entries if e.kind.value in kinds]

    def output(self):
        return "\n".join(self.texts(("plain", "rich")))


@pytest.fixture
def terminal(store):
    t = Terminal(store)
    t.content_store.load_content()
    return t
