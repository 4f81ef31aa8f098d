"""
core/commands.py
----------------
Terminal command registry.

Maps a command name to a function producing tagged output lines. Commands
only read the current portfolio record; ``clear`` produces no output and
is flagged so the interpreter truncates the display instead.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from core.display import OutputLine, plain, rich
from core.portfolio import OWNER_NAME, OWNER_TITLE, PortfolioContent

CommandResult = Optional[List[OutputLine]]


@dataclass(frozen=True)
class Command:
    name: str
    handler: Callable[[], CommandResult]
    clears_display: bool = False

    def run(self) -> CommandResult:
        return self.handler()


def _link(href: str, label: str) -> str:
    return f'<a href="{html.escape(href)}" target="_blank">{html.escape(label)}</a>'


def _href(value: str) -> str:
    if "@" in value and "/" not in value:
        return f"mailto:{value}"
    if value.startswith(("http://", "https://", "mailto:")):
        return value
    return f"https://{value}"


HELP_TEXT = """Available commands:
  welcome        - Display the welcome message
  about          - Learn more about me
  projects       - View my recent projects
  skills         - See my technical skills
  experience     - Check out my work experience
  contact        - Get in touch with me
  education      - My academic background
  certifications - Certificates I hold
  leadership     - Leadership and community roles
  clear          - Clear the terminal screen
"""

TROUBLESHOOT_LINES = [
    "--- Database Connection Troubleshooting ---",
    "",
    'A "could not connect" error usually comes from the document store configuration.',
    "",
    "Please check the following:",
    "",
    "1. <span class='text-yellow-400'>Is a store selected?</span>",
    "   PORTFOLIO_STORE must be 'sqlite' or 'supabase' (not 'none').",
    "",
    "2. <span class='text-yellow-400'>Are the Supabase credentials set?</span>",
    "   SUPABASE_URL and SUPABASE_ANON_KEY must point at your project.",
    "",
    "3. <span class='text-yellow-400'>Does the documents table exist?</span>",
    "   Create it with the schema documented in supabase_client/store.py.",
    "",
    "4. <span class='text-yellow-400'>Are Anonymous Sign-ins enabled?</span>",
    "   In Supabase go to Authentication > Providers and enable 'Anonymous'.",
    "",
    "5. <span class='text-yellow-400'>Do row level security policies allow reads?</span>",
    "   The anonymous role needs select/insert/update on the documents table.",
]


class CommandRegistry:
    """Read-only command table over the current portfolio record."""

    def __init__(self, content: Callable[[], PortfolioContent]):
        self._content = content
        self._commands: Dict[str, Command] = {}
        for cmd in (
            Command("welcome", self.welcome),
            Command("help", lambda: plain(HELP_TEXT)),
            Command("troubleshoot", self.troubleshoot),
            Command("about", self.about),
            Command("projects", self.projects),
            Command("skills", self.skills),
            Command("experience", self.experience),
            Command("contact", self.contact),
            Command("education", lambda: plain(self._content().education)),
            Command("certifications", lambda: plain(self._content().certifications)),
            Command("leadership", lambda: plain(self._content().leadership)),
            Command("sudo", lambda: plain("Usage: sudo update <section> <action>")),
            Command("clear", lambda: None, clears_display=True),
        ):
            self._commands[cmd.name] = cmd

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def get(self, name: str) -> Command:
        return self._commands[name]

    def run(self, name: str) -> CommandResult:
        return self._commands[name].run()

    # -----------------------------------------------------------------
    # Formatters
    # -----------------------------------------------------------------
    def welcome(self) -> List[OutputLine]:
        return plain(
            f"Hi, I'm {OWNER_NAME}, a {OWNER_TITLE}.\n"
            "Welcome to my interactive portfolio terminal!\n"
            "Type 'help' to see available commands."
        )

    def troubleshoot(self) -> List[OutputLine]:
        return [rich(line) if "<span" in line else plain(line)[0] for line in TROUBLESHOOT_LINES]

    def about(self) -> List[OutputLine]:
        return plain(self._content().about)

    def projects(self) -> List[OutputLine]:
        projects = self._content().projects
        if not projects:
            return plain("No projects found.")
        lines = plain("Here are some of my projects:\n")
        for i, p in enumerate(projects, start=1):
            if i > 1:
                lines += plain("")
            lines.append(rich(f"{i}. {_link(p.link or '#', p.name)}"))
            lines += plain("   " + p.description.replace("\n", "\n   "))
        return lines

    def skills(self) -> List[OutputLine]:
        skills = self._content().skills
        if not skills:
            return plain("No skills found.")
        text = "I'm proficient in the following technologies:\n"
        text += "".join(f"\n- {s.category}: {s.items}" for s in skills)
        return plain(text)

    def experience(self) -> List[OutputLine]:
        experience = self._content().experience
        if not experience:
            return plain("No experience found.")
        return plain("\n\n".join(f"{e.role} | {e.company} | {e.period}\n{e.details}" for e in experience))

    def contact(self) -> List[OutputLine]:
        contact = self._content().contact
        if not contact:
            return plain("No contact details found.")
        lines = plain("You can reach me via:\n")
        for channel, value in contact.items():
            lines.append(rich(f"- {html.escape(channel.capitalize())}: {_link(_href(value), value)}"))
        return lines
