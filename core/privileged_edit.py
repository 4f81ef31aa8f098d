"""
core/privileged_edit.py
-----------------------
``sudo update <section> <action>``: authenticated edits of the portfolio.

The flow is a generator. It yields ``Say`` steps (lines to type) and
``Prompt`` steps (questions for the operator); the interpreter sends the
answer back in, ``None`` meaning the prompt was cancelled.

Valid targets form a closed set of ``(Section, Action)`` pairs. Every
action works on a copy of the record; the copy is saved as a whole and
only then becomes the interpreter's record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Generator, List, NamedTuple, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from core.content_store import ContentSaveError, ContentStore
from core.credentials import CredentialStore
from core.display import OutputLine, plain
from core.portfolio import Experience, PortfolioContent, Project, SkillGroup, entry_label
from database.documents import StoreError

USAGE = "Usage: sudo update <section> <action>"


class Section(str, Enum):
    ABOUT = "about"
    PROJECTS = "projects"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    CONTACT = "contact"


class Action(str, Enum):
    SET = "set"
    ADD = "add"
    REMOVE = "remove"
    EDIT = "edit"


class EditTarget(NamedTuple):
    section: Section
    action: Action


class EditUsageError(ValueError):
    def __init__(self) -> None:
        super().__init__(USAGE)


class InvalidEditTarget(ValueError):
    def __init__(self, section: str, action: str):
        super().__init__(f"Action '{action}' is not valid for section '{section}'.")
        self.section = section
        self.action = action


_LISTS = (Section.PROJECTS, Section.SKILLS, Section.EXPERIENCE)

VALID_TARGETS = frozenset(
    [EditTarget(Section.ABOUT, Action.SET), EditTarget(Section.CONTACT, Action.EDIT)]
    + [EditTarget(s, a) for s in _LISTS for a in (Action.ADD, Action.REMOVE, Action.EDIT)]
)


def parse_target(args: Sequence[str]) -> EditTarget:
    """
    Parse ``<section> <action>``.

    Raises ``EditUsageError`` for missing or unknown words and
    ``InvalidEditTarget`` for a known pair outside ``VALID_TARGETS``.
    """
    if len(args) < 2:
        raise EditUsageError()
    try:
        target = EditTarget(Section(args[0]), Action(args[1]))
    except ValueError:
        raise EditUsageError() from None
    if target not in VALID_TARGETS:
        raise InvalidEditTarget(args[0], args[1])
    return target


# ---------------------------------------------------------------------------
# Flow steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Prompt:
    message: str
    default: Optional[str] = None
    secret: bool = False


@dataclass(frozen=True)
class Say:
    lines: Tuple[OutputLine, ...]


def say(text: str) -> Say:
    return Say(tuple(plain(text)))


Step = Union[Prompt, Say]
Flow = Generator[Step, Optional[str], bool]

# field prompts for "add": (field, message, default, required)
_ADD_FIELDS: Dict[Section, Tuple[type, List[Tuple[str, str, Optional[str], bool]]]] = {
    Section.PROJECTS: (
        Project,
        [
            ("name", "Enter project name:", None, True),
            ("description", "Enter project description:", None, False),
            ("link", "Enter project link (URL):", "https://", False),
        ],
    ),
    Section.SKILLS: (
        SkillGroup,
        [
            ("category", "Enter skill category (e.g., Languages):", None, True),
            ("items", "Enter skills (comma-separated):", None, False),
        ],
    ),
    Section.EXPERIENCE: (
        Experience,
        [
            ("role", "Enter role:", None, True),
            ("company", "Enter company:", None, False),
            ("period", "Enter period (e.g., Summer 2024):", None, False),
            ("details", "Enter details (use \\n for new lines):", None, False),
        ],
    ),
}


class PrivilegedEditFlow:
    def __init__(self, content_store: ContentStore, credentials: CredentialStore):
        self.content_store = content_store
        self.credentials = credentials
        self._actions: Dict[Action, Callable[[Section, PortfolioContent], Flow]] = {
            Action.SET: self._set,
            Action.ADD: self._add,
            Action.REMOVE: self._remove,
            Action.EDIT: self._edit,
        }

    def run(self, args: Sequence[str]) -> Flow:
        try:
            target = parse_target(args)
        except (EditUsageError, InvalidEditTarget) as e:
            yield say(f"\n{e}")
            return False

        if not (yield from self._authenticate()):
            return False

        record = self.content_store.snapshot()
        changed = yield from self._actions[target.action](target.section, record)
        if not changed:
            return False

        try:
            self.content_store.save_content(record)
        except ContentSaveError:
            yield say("\nError: Could not save changes to the database.")
            return False

        yield say(f"\n'{target.section.value}' section updated successfully.")
        return True

    # -----------------------------------------------------------------
    # Authentication
    # -----------------------------------------------------------------
    def _authenticate(self) -> Flow:
        entered = yield Prompt("Enter administrator password:", secret=True)
        if entered is None:
            return False

        try:
            stored = self.credentials.get()
        except StoreError as e:
            print(f"[PrivilegedEdit] ⚠️ Credential lookup failed: {e}")
            yield say("\nError: Could not verify password. Check database permissions.")
            return False

        if stored is None:
            yield say("\nNo admin password found. Let's set one up.")
            created = yield Prompt("Please create a new administrator password:", secret=True)
            if created:
                try:
                    self.credentials.create(created)
                except StoreError as e:
                    print(f"[PrivilegedEdit] ⚠️ Credential creation failed: {e}")
                    yield say("\nError: Could not store the new password.")
                    return False
                yield say("\nPassword created successfully. Please run the command again to continue.")
            return False

        if not CredentialStore.matches(entered, stored):
            yield say("\nError: Incorrect password.")
            return False
        return True

    # -----------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------
    def _cancelled(self, section: Section) -> Flow:
        yield say(f"\nUpdate of '{section.value}' cancelled. No changes made.")
        return False

    def _set(self, section: Section, record: PortfolioContent) -> Flow:
        value = yield Prompt(f"Enter new content for '{section.value}':", default=getattr(record, section.value) or "")
        if value is None:
            return (yield from self._cancelled(section))
        setattr(record, section.value, value)
        return True

    def _add(self, section: Section, record: PortfolioContent) -> Flow:
        model, fields = _ADD_FIELDS[section]
        values: Dict[str, str] = {}
        for name, message, default, required in fields:
            answer = yield Prompt(message, default=default)
            if answer is None or (required and not answer):
                return (yield from self._cancelled(section))
            values[name] = answer
        if section is Section.EXPERIENCE:
            values["details"] = values["details"].replace("\\n", "\n")
        getattr(record, section.value).append(model(**values))
        return True

    def _choose(self, section: Section, items: List[BaseModel], verb: str) -> Generator[Step, Optional[str], Optional[int]]:
        if not items:
            yield say(f"\nNothing to {verb} in '{section.value}'.")
            return None
        listing = "\n".join(f"{i}: {entry_label(item)}" for i, item in enumerate(items, start=1))
        answer = yield Prompt(f"Which item to {verb}?\n{listing}\n\nEnter number:")
        if not answer:
            yield from self._cancelled(section)
            return None
        try:
            index = int(answer.strip()) - 1
        except ValueError:
            index = -1
        if index < 0 or index >= len(items):
            yield say("\nError: Invalid number.")
            return None
        return index

    def _remove(self, section: Section, record: PortfolioContent) -> Flow:
        items = getattr(record, section.value)
        index = yield from self._choose(section, items, "remove")
        if index is None:
            return False
        del items[index]
        return True

    def _edit(self, section: Section, record: PortfolioContent) -> Flow:
        if section is Section.CONTACT:
            return (yield from self._edit_contact(record))

        items = getattr(record, section.value)
        index = yield from self._choose(section, items, "edit")
        if index is None:
            return False

        item = items[index]
        updates: Dict[str, str] = {}
        for key, current in item.model_dump().items():
            answer = yield Prompt(f"Edit '{key}':", default=str(current))
            if answer is None:
                return (yield from self._cancelled(section))
            updates[key] = answer
        items[index] = item.model_copy(update=updates)
        return True

    def _edit_contact(self, record: PortfolioContent) -> Flow:
        if not record.contact:
            yield say("\nNothing to edit in 'contact'.")
            return False
        updates: Dict[str, str] = {}
        for key, current in record.contact.items():
            answer = yield Prompt(f"Edit {key} link (e.g., github.com/user):", default=current)
            if answer is None:
                return (yield from self._cancelled(Section.CONTACT))
            updates[key] = answer
        record.contact = {**record.contact, **updates}
        return True
