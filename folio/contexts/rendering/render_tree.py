"""
Render Tree

Pure mapping from a ResumeAggregate to the display-ready structure every
adapter (markdown preview, HTML preview, LaTeX/PDF) renders from. All shaping
rules live here so that adapters only decide layout:

- Name falls back to a placeholder when empty
- Contact line: email, "• phone", "• location" (present items only, fixed order)
- Link row: LinkedIn, GitHub, Website (present items only, fixed order)
- Empty sections are omitted, never rendered as bare headers
- Date ranges read "{start} - {end}", with "Present" whenever current is set
- Skills collapse into one comma-joined line in collection order
"""

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.editing.data_structures import ResumeAggregate

load_dotenv()
PRESENTATION_CONFIG_PATH = Path(
    os.getenv("PRESENTATION_CONFIG_PATH", str(Path(__file__).parent / "presentation.yaml"))
)


def load_presentation_config(config_path: Path = None) -> Dict[str, Any]:
    """
    Load presentation.yaml as a plain dict.

    Args:
        config_path: Optional path to config file (defaults to PRESENTATION_CONFIG_PATH)
    """
    if config_path is None:
        config_path = PRESENTATION_CONFIG_PATH
    return OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)


@dataclass
class RenderLink:
    label: str
    url: str


@dataclass
class RenderEntry:
    """
    One entry of a list section (an experience, a degree, a project).

    Attributes:
        heading: Bold first line (position, degree, project name)
        subtitle: Second line (company and location, institution, project url)
        date_range: "{start} - {end}" label, None for undated entries
        description: Free text body
    """

    heading: str
    subtitle: Optional[str] = None
    date_range: Optional[str] = None
    description: Optional[str] = None


@dataclass
class RenderSection:
    """
    A non-empty resume section.

    Text sections (summary, skills) carry `text`; list sections carry `entries`.
    """

    key: str
    title: str
    text: Optional[str] = None
    entries: List[RenderEntry] = field(default_factory=list)


@dataclass
class RenderTree:
    title: str
    name: str
    contact_items: List[str] = field(default_factory=list)
    links: List[RenderLink] = field(default_factory=list)
    sections: List[RenderSection] = field(default_factory=list)

    @property
    def contact_line(self) -> str:
        return " ".join(self.contact_items)

    def section(self, key: str) -> Optional[RenderSection]:
        for section in self.sections:
            if section.key == key:
                return section
        return None


def format_date(value: Optional[date], date_format: str = "%b %Y") -> str:
    """Format a date as e.g. "Jan 2024"; missing dates format as an empty string."""
    if value is None:
        return ""
    return value.strftime(date_format)


def format_date_range(
    start: Optional[date],
    end: Optional[date],
    current: bool,
    date_format: str = "%b %Y",
    present_label: str = "Present",
) -> str:
    """
    Build "{start} - {end}". When `current` is set the end label is always
    `present_label`, whatever end date is stored.
    """
    end_label = present_label if current else format_date(end, date_format)
    return f"{format_date(start, date_format)} - {end_label}"


def build_render_tree(aggregate: ResumeAggregate, config: Dict[str, Any] = None) -> RenderTree:
    """
    Shape a resume aggregate for display.

    Args:
        aggregate: Resume with all owned records, collections already ordered
        config: Presentation config (defaults to load_presentation_config())

    Returns:
        RenderTree containing only the sections that have content
    """
    config = config or load_presentation_config()
    placeholders = config["placeholders"]
    titles = config["section_titles"]
    date_format = config["date_format"]
    present_label = config["present_label"]
    bullet = config["contact_bullet"]

    contact = aggregate.contact_info
    tree = RenderTree(
        title=aggregate.title,
        name=(contact.full_name if contact else None) or placeholders["name"],
    )

    if contact is not None:
        if contact.email:
            tree.contact_items.append(contact.email)
        if contact.phone:
            tree.contact_items.append(f"{bullet}{contact.phone}")
        if contact.location:
            tree.contact_items.append(f"{bullet}{contact.location}")

        for attribute, label in config["link_labels"].items():
            url = getattr(contact, attribute)
            if url:
                tree.links.append(RenderLink(label=label, url=url))

    if aggregate.summary is not None and aggregate.summary.content:
        tree.sections.append(
            RenderSection(key="summary", title=titles["summary"], text=aggregate.summary.content)
        )

    if aggregate.experiences:
        entries = []
        for exp in aggregate.experiences:
            subtitle = exp.company
            if exp.location:
                subtitle = f"{subtitle}, {exp.location}"
            entries.append(
                RenderEntry(
                    heading=exp.position or placeholders["position"],
                    subtitle=subtitle,
                    date_range=format_date_range(
                        exp.start_date, exp.end_date, exp.current, date_format, present_label
                    ),
                    description=exp.description or None,
                )
            )
        tree.sections.append(
            RenderSection(key="experience", title=titles["experience"], entries=entries)
        )

    if aggregate.education:
        entries = []
        for edu in aggregate.education:
            heading = edu.degree
            if edu.field:
                heading = f"{heading} in {edu.field}"
            entries.append(
                RenderEntry(
                    heading=heading,
                    subtitle=edu.institution,
                    date_range=format_date_range(
                        edu.start_date, edu.end_date, edu.current, date_format, present_label
                    ),
                    description=edu.description or None,
                )
            )
        tree.sections.append(
            RenderSection(key="education", title=titles["education"], entries=entries)
        )

    if aggregate.skills:
        tree.sections.append(
            RenderSection(
                key="skills",
                title=titles["skills"],
                text=", ".join(skill.name for skill in aggregate.skills),
            )
        )

    if aggregate.projects:
        entries = [
            RenderEntry(
                heading=project.name or placeholders["project"],
                subtitle=project.url or None,
                description=project.description or None,
            )
            for project in aggregate.projects
        ]
        tree.sections.append(
            RenderSection(key="projects", title=titles["projects"], entries=entries)
        )

    return tree
