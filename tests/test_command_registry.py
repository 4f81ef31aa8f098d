# tests/test_command_registry.py
from core.commands import CommandRegistry
from core.display import LineKind
from core.portfolio import PortfolioContent, Project, SkillGroup, default_content


def _registry(content):
    return CommandRegistry(lambda: content)


def test_all_terminal_commands_registered():
    names = set(_registry(default_content()))
    assert {
        "welcome", "help", "about", "projects", "skills", "experience", "contact",
        "education", "certifications", "leadership", "troubleshoot", "sudo", "clear",
    } <= names


def test_projects_render_link_and_indented_description():
    content = PortfolioContent(projects=[
        Project(name="A", description="first", link="https://a.dev"),
        Project(name="B", description="second", link="https://b.dev"),
    ])
    lines = _registry(content).run("projects")

    assert lines[0].content == "Here are some of my projects:"
    rich_lines = [l for l in lines if l.kind is LineKind.RICH]
    assert rich_lines[0].content == '1. <a href="https://a.dev" target="_blank">A</a>'
    assert rich_lines[1].content.startswith("2. ")
    assert "   first" in [l.content for l in lines]


def test_empty_sections_have_placeholders():
    registry = _registry(PortfolioContent())
    assert registry.run("projects")[0].content == "No projects found."
    assert registry.run("skills")[0].content == "No skills found."
    assert registry.run("experience")[0].content == "No experience found."


def test_skills_listing():
    content = PortfolioContent(skills=[SkillGroup(category="Languages", items="Python, SQL")])
    texts = [l.content for l in _registry(content).run("skills")]
    assert texts[0] == "I'm proficient in the following technologies:"
    assert "- Languages: Python, SQL" in texts


def test_contact_comes_from_record():
    content = PortfolioContent(contact={"github": "github.com/someone", "email": "me@example.com"})
    lines = _registry(content).run("contact")
    markup = " ".join(l.content for l in lines if l.kind is LineKind.RICH)
    assert 'href="https://github.com/someone"' in markup
    assert 'href="mailto:me@example.com"' in markup


def test_clear_and_sudo():
    registry = _registry(default_content())
    assert registry.get("clear").clears_display
    assert registry.run("clear") is None
    assert registry.run("sudo")[0].content == "Usage: sudo update <section> <action>"
