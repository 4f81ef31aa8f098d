"""
Portfolio content schema.

One ``PortfolioContent`` document holds everything the terminal and the
profile view show. Extra top-level fields written by other tools are kept
as-is so a save never drops them.
"""

from __future__ import annotations

import os
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

OWNER_NAME = os.getenv("PORTFOLIO_OWNER", "Harekrushna Behera")
OWNER_TITLE = os.getenv("PORTFOLIO_OWNER_TITLE", "Software Developer")


class Project(BaseModel):
    name: str
    description: str = ""
    link: str = ""


class SkillGroup(BaseModel):
    category: str
    items: str = Field(default="", description="Comma-separated skills")


class Experience(BaseModel):
    role: str
    company: str = ""
    period: str = ""
    details: str = ""


class PortfolioContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    about: str = ""
    projects: List[Project] = Field(default_factory=list)
    skills: List[SkillGroup] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    contact: Dict[str, str] = Field(default_factory=dict, description="Channel name -> handle or URL")
    education: str = ""
    certifications: str = ""
    leadership: str = ""


def entry_label(item: BaseModel) -> str:
    """Short label for a structured entry in selection lists."""
    return getattr(item, "name", None) or getattr(item, "category", None) or getattr(item, "role", "")


def default_content() -> PortfolioContent:
    """Embedded content used when the document store has nothing (or fails)."""
    return PortfolioContent(
        about=(
            "I'm a passionate software engineer who enjoys turning ideas into fast,\n"
            "friendly web experiences. I like clean interfaces, small tools that\n"
            "remove friction, and learning something new with every project."
        ),
        projects=[
            Project(
                name="Portfolio Terminal",
                description="This interactive portfolio! A terminal-style view backed by a live document database.",
                link="https://github.com/DynamicHarekrushna",
            ),
        ],
        skills=[
            SkillGroup(category="Languages", items="JavaScript, Python, Java, HTML5, CSS3, SQL"),
            SkillGroup(category="Frontend", items="React, Tailwind CSS, Framer Motion"),
            SkillGroup(category="Tools", items="Git & GitHub, Vite, VS Code, Figma, Postman"),
        ],
        experience=[
            Experience(
                role="Software Engineer Intern",
                company="Tech Company Inc.",
                period="Summer 2024",
                details="- Developed and maintained features for a customer-facing web app.\n"
                "- Collaborated with designers on reusable UI components.",
            ),
        ],
        contact={
            "linkedin": "linkedin.com/in/harekrushnabehera121",
            "github": "github.com/DynamicHarekrushna",
            "email": "harekrushnabehera2006@gmail.com",
        },
        education="Bachelor of Science in Computer Science",
        certifications="- Certified Cloud Practitioner | AWS",
        leadership="- President, University Coding Club (2023-2024)",
    )
