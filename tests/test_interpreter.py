# tests/test_interpreter.py
from core.interpreter import (
    CONNECTED_BANNER,
    NOT_CONFIGURED_BANNER,
    UNREACHABLE_BANNER,
    CommandHistory,
    InterpreterState,
    normalize_command,
)
from tests.conftest import Terminal


def test_unknown_command(terminal):
    terminal.run("foo")
    assert terminal.texts() == ["foo", "bash: command not found: foo"]
    assert terminal.interp.state is InterpreterState.IDLE


def test_blank_input_does_nothing(terminal):
    terminal.run("   ")
    assert terminal.texts() == []
    assert terminal.interp.history.entries == []


def test_commands_run_in_submission_order(terminal):
    terminal.interp.submit("about")
    terminal.interp.submit("skills")
    terminal.interp.submit("nope")
    assert len(terminal.interp.queue) == 2
    terminal.scheduler.run_until_idle()

    echoes = terminal.texts(("echo",))
    assert echoes == ["about", "skills", "nope"]

    texts = terminal.texts()
    about_end = texts.index("skills")
    assert all(t != "I'm proficient in the following technologies:" for t in texts[:about_end])
    assert texts[-1] == "bash: command not found: nope"


def test_clear_empties_display(terminal):
    terminal.run("help")
    terminal.run("clear")
    assert len(terminal.interp.display) == 1


def test_history_walk():
    history = CommandHistory()
    history.push("about")
    history.push("skills")
    assert history.previous() == "skills"
    assert history.previous() == "about"
    assert history.previous() == "about"
    assert history.next() == "skills"
    assert history.next() == ""


def test_history_index_resets_after_command(terminal):
    terminal.run("about")
    terminal.run("skills")
    assert terminal.interp.history.previous() == "skills"
    assert terminal.interp.history.previous() == "about"
    terminal.run("help")
    assert terminal.interp.history.previous() == "help"


def test_normalisation_happens_at_the_surface():
    assert normalize_command("  HeLP ") == "help"


def test_start_connects_and_loads(store):
    t = Terminal(store)
    t.interp.start()
    t.scheduler.run_until_idle()

    assert t.texts(("echo",)) == ["welcome"]
    texts = t.texts(("plain", "rich"))
    assert texts[0].startswith("Hi, I'm ")
    assert "Connecting to database..." in texts
    assert texts[-1] == CONNECTED_BANNER


def test_start_without_store():
    t = Terminal(None)
    t.interp.start()
    t.scheduler.run_until_idle()
    assert t.texts()[-1] == NOT_CONFIGURED_BANNER


def test_unreachable_store_points_at_troubleshoot(flaky_store):
    flaky_store.fail_reads = True
    t = Terminal(flaky_store)
    assert t.interp.connect() is False
    t.scheduler.run_until_idle()

    assert t.texts()[-1] == UNREACHABLE_BANNER
    assert "troubleshoot" in UNREACHABLE_BANNER
    # defaults still served
    t.run("about")
    assert t.texts()[-1]


def test_close_drops_queue(terminal):
    terminal.interp.submit("about")
    terminal.interp.submit("skills")
    terminal.interp.close()
    terminal.scheduler.run_until_idle()
    assert "skills" not in terminal.texts(("echo",))
    terminal.interp.submit("help")
    assert terminal.interp.closed
