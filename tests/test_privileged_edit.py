# tests/test_privileged_edit.py
import pytest

from core.content_store import CONTENT_KEY
from core.portfolio import Project
from core.privileged_edit import EditUsageError, InvalidEditTarget, parse_target
from tests.conftest import Terminal

PASSWORD = "s3cret"


@pytest.fixture
def admin(terminal):
    terminal.credentials.create(PASSWORD)
    return terminal


def test_parse_target_closed_set():
    assert parse_target(["projects", "add"]).action.value == "add"
    with pytest.raises(EditUsageError):
        parse_target(["projects"])
    with pytest.raises(EditUsageError):
        parse_target(["hobbies", "add"])
    with pytest.raises(InvalidEditTarget):
        parse_target(["about", "add"])
    with pytest.raises(InvalidEditTarget):
        parse_target(["contact", "remove"])


def test_invalid_target_reported_before_password(admin):
    admin.run("sudo update about add")
    assert admin.prompt is None
    assert "Action 'add' is not valid for section 'about'." in admin.texts()


def test_usage_for_unknown_section(admin):
    admin.run("sudo update hobbies add")
    assert admin.prompt is None
    assert "Usage: sudo update <section> <action>" in admin.texts()


def test_add_project(admin, store):
    admin.run("sudo update projects add")
    assert admin.prompt.secret
    admin.answer(PASSWORD)
    assert admin.prompt.message == "Enter project name:"
    admin.answer("X")
    admin.answer("Y")
    assert admin.prompt.default == "https://"
    admin.answer("Z")

    assert admin.prompt is None
    assert admin.content_store.content.projects[-1] == Project(name="X", description="Y", link="Z")
    assert store.get(CONTENT_KEY)["projects"][-1] == {"name": "X", "description": "Y", "link": "Z"}
    assert "'projects' section updated successfully." in admin.texts()


def test_cancel_leaves_record_untouched(admin, store):
    before = admin.content_store.content.model_dump()
    stored_before = store.get(CONTENT_KEY)

    admin.run("sudo update projects add")
    admin.answer(PASSWORD)
    admin.answer("X")
    admin.answer(None)

    assert admin.content_store.content.model_dump() == before
    assert store.get(CONTENT_KEY) == stored_before
    assert "Update of 'projects' cancelled. No changes made." in admin.texts()


def test_empty_required_field_aborts(admin):
    before = admin.content_store.content.model_dump()
    admin.run("sudo update skills add")
    admin.answer(PASSWORD)
    admin.answer("")
    assert admin.prompt is None
    assert admin.content_store.content.model_dump() == before


def test_wrong_password(admin):
    admin.run("sudo update about set")
    admin.answer("nope")
    assert admin.prompt is None
    assert "Error: Incorrect password." in admin.texts()


def test_first_run_creates_password(terminal):
    terminal.run("sudo update about set")
    terminal.answer("anything")
    assert "No admin password found. Let's set one up." in terminal.texts()
    assert terminal.prompt.message == "Please create a new administrator password:"
    terminal.answer("newpw")

    assert terminal.credentials.get() == "newpw"
    assert "Password created successfully. Please run the command again to continue." in terminal.texts()
    assert terminal.prompt is None


def test_set_about(admin, store):
    admin.run("sudo update about set")
    admin.answer(PASSWORD)
    assert admin.prompt.default == admin.content_store.content.about
    admin.answer("New about text")
    assert store.get(CONTENT_KEY)["about"] == "New about text"
    admin.run("about")
    assert admin.texts()[-1] == "New about text"


def test_remove_and_invalid_number(admin):
    count = len(admin.content_store.content.projects)
    admin.run("sudo update projects remove")
    admin.answer(PASSWORD)
    assert admin.prompt.message.startswith("Which item to remove?\n1: ")
    admin.answer("9")
    assert "Error: Invalid number." in admin.texts()
    assert len(admin.content_store.content.projects) == count

    admin.run("sudo update projects remove")
    admin.answer(PASSWORD)
    admin.answer("1")
    assert len(admin.content_store.content.projects) == count - 1


def test_edit_skill_group(admin):
    admin.run("sudo update skills edit")
    admin.answer(PASSWORD)
    admin.answer("1")
    assert admin.prompt.message == "Edit 'category':"
    assert admin.prompt.default == "Languages"
    admin.answer("Langs")
    admin.answer("Python")
    first = admin.content_store.content.skills[0]
    assert (first.category, first.items) == ("Langs", "Python")


def test_experience_details_newlines(admin):
    admin.run("sudo update experience add")
    admin.answer(PASSWORD)
    for value in ("Dev", "Acme", "2025", "line one\\nline two"):
        admin.answer(value)
    assert admin.content_store.content.experience[-1].details == "line one\nline two"


def test_edit_contact(admin):
    admin.run("sudo update contact edit")
    admin.answer(PASSWORD)
    answers = []
    while admin.prompt is not None:
        assert admin.prompt.message.endswith("link (e.g., github.com/user):")
        answers.append(admin.prompt.default)
        admin.answer(admin.prompt.default.upper())
    assert list(admin.content_store.content.contact.values()) == [a.upper() for a in answers]
    admin.run("contact")
    assert answers[0].upper() in admin.output()


def test_failed_save_rolls_back(flaky_store):
    t = Terminal(flaky_store)
    t.content_store.load_content()
    t.credentials.create(PASSWORD)
    before = t.content_store.content.model_dump()

    flaky_store.fail_writes = True
    t.run("sudo update projects add")
    t.answer(PASSWORD)
    for value in ("X", "Y", "Z"):
        t.answer(value)

    assert "Error: Could not save changes to the database." in t.texts()
    assert t.content_store.content.model_dump() == before


def test_commands_wait_for_edit_flow(admin):
    admin.run("sudo update about set")
    admin.interp.submit("help")
    assert "help" not in admin.texts(("echo",))
    admin.answer(None)
    assert admin.prompt is None
    assert admin.texts(("echo",))[-1] == "help"


def test_no_store_reports_verification_error():
    t = Terminal(None)
    t.run("sudo update about set")
    t.answer("pw")
    assert "Error: Could not verify password. Check database permissions." in t.texts()


def test_cancelled_password_prompt_changes_nothing(admin, store):
    before = admin.content_store.content.model_dump()
    stored_before = store.get(CONTENT_KEY)

    admin.run("sudo update projects add")
    assert admin.prompt.secret
    admin.answer(None)

    assert admin.prompt is None
    assert admin.content_store.content.model_dump() == before
    assert store.get(CONTENT_KEY) == stored_before
    assert admin.credentials.get() == PASSWORD
