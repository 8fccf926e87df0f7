"""
Resume Aggregate Data Structures

Defines data classes for a resume and its owned records: contact info,
summary, and the four ordered section collections (experience, education,
skills, projects). These structures are the interface between the Editing
context (which persists them) and the Rendering context (which displays them).
"""

import sqlite3
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Dict, List, Optional, Union


def parse_date(value: Union[date, str, None]) -> Optional[date]:
    """
    Normalize a date input to a `date` (or None).

    Accepts `date` objects, ISO strings ("2024-03-01", or a full ISO timestamp
    whose first ten characters are the date), and empty values.

    Raises:
        ValueError: If a non-empty string is not an ISO date
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _date_to_text(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Resume:
    """
    Root record of a resume aggregate.

    Attributes:
        id: Opaque resume identifier
        owner_id: Identifier of the owning user
        title: Resume title shown in the resume list
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 timestamp of the last change to the resume or any child
    """

    id: str
    owner_id: str
    title: str
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Resume":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            title=row["title"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


@dataclass
class ResumeListing:
    """Row of the resume list view."""

    id: str
    title: str
    updated_at: str


@dataclass
class ContactInfo:
    """
    Contact header of a resume (1:1 with Resume, every field optional).
    """

    resume_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "ContactInfo":
        return cls(**{f.name: row[f.name] for f in fields(cls)})


@dataclass
class Summary:
    """Professional summary paragraph (1:1 with Resume)."""

    resume_id: str
    content: str = ""

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Summary":
        return cls(resume_id=row["resume_id"], content=row["content"])


@dataclass
class Experience:
    """
    Work experience entry.

    When `current` is True the entry is ongoing and `end_date` is ignored by
    every presentation adapter, even if it is set.
    """

    id: str
    resume_id: str
    company: str = ""
    position: str = ""
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None
    sort_order: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Experience":
        return cls(
            id=row["id"],
            resume_id=row["resume_id"],
            company=row["company"],
            position=row["position"],
            location=row["location"],
            start_date=parse_date(row["start_date"]),
            end_date=parse_date(row["end_date"]),
            current=bool(row["current"]),
            description=row["description"],
            sort_order=row["sort_order"],
        )


@dataclass
class Education:
    """Education entry. Same `current`/`end_date` rule as Experience."""

    id: str
    resume_id: str
    institution: str = ""
    degree: str = ""
    field: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None
    sort_order: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Education":
        return cls(
            id=row["id"],
            resume_id=row["resume_id"],
            institution=row["institution"],
            degree=row["degree"],
            field=row["field"],
            start_date=parse_date(row["start_date"]),
            end_date=parse_date(row["end_date"]),
            current=bool(row["current"]),
            description=row["description"],
            sort_order=row["sort_order"],
        )


@dataclass
class Skill:
    id: str
    resume_id: str
    name: str = ""
    sort_order: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Skill":
        return cls(
            id=row["id"],
            resume_id=row["resume_id"],
            name=row["name"],
            sort_order=row["sort_order"],
        )


@dataclass
class Project:
    id: str
    resume_id: str
    name: str = ""
    url: Optional[str] = None
    description: Optional[str] = None
    sort_order: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Project":
        return cls(
            id=row["id"],
            resume_id=row["resume_id"],
            name=row["name"],
            url=row["url"],
            description=row["description"],
            sort_order=row["sort_order"],
        )


@dataclass(frozen=True)
class CollectionSpec:
    """
    Storage description of one ordered section collection.

    Attributes:
        kind: Collection name used by the service API ("experience", "skill", ...)
        table: SQLite table holding the rows
        model: Data class rows are loaded into
        editable_fields: Columns that callers may set on add/update
        date_fields: Subset of editable_fields stored as ISO dates
        bool_fields: Subset of editable_fields stored as 0/1
        defaults: Values for a freshly added blank row
    """

    kind: str
    table: str
    model: type
    editable_fields: tuple
    date_fields: tuple = ()
    bool_fields: tuple = ()
    defaults: Dict[str, Any] = field(default_factory=dict)

    def to_columns(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert caller-supplied field values to storage column values.

        Raises:
            ValueError: If a field is not editable for this collection
        """
        unknown = set(values) - set(self.editable_fields)
        if unknown:
            raise ValueError(
                f"Unknown {self.kind} field(s): {sorted(unknown)}. "
                f"Valid fields: {list(self.editable_fields)}"
            )

        columns = {}
        for name, value in values.items():
            if name in self.date_fields:
                columns[name] = _date_to_text(parse_date(value))
            elif name in self.bool_fields:
                columns[name] = 1 if value else 0
            else:
                columns[name] = value
        return columns

    def row_values(self, item) -> Dict[str, Any]:
        """Storage column values of an existing item's editable fields (for cloning)."""
        return self.to_columns({name: getattr(item, name) for name in self.editable_fields})


COLLECTIONS: Dict[str, CollectionSpec] = {
    "experience": CollectionSpec(
        kind="experience",
        table="experiences",
        model=Experience,
        editable_fields=(
            "company",
            "position",
            "location",
            "start_date",
            "end_date",
            "current",
            "description",
        ),
        date_fields=("start_date", "end_date"),
        bool_fields=("current",),
        defaults={"company": "", "position": "", "current": False},
    ),
    "education": CollectionSpec(
        kind="education",
        table="education",
        model=Education,
        editable_fields=(
            "institution",
            "degree",
            "field",
            "start_date",
            "end_date",
            "current",
            "description",
        ),
        date_fields=("start_date", "end_date"),
        bool_fields=("current",),
        defaults={"institution": "", "degree": "", "current": False},
    ),
    "skill": CollectionSpec(
        kind="skill",
        table="skills",
        model=Skill,
        editable_fields=("name",),
        defaults={"name": ""},
    ),
    "project": CollectionSpec(
        kind="project",
        table="projects",
        model=Project,
        editable_fields=("name", "url", "description"),
        defaults={"name": ""},
    ),
}

CONTACT_FIELDS = (
    "full_name",
    "email",
    "phone",
    "location",
    "linkedin",
    "github",
    "website",
)


def get_collection(kind: str) -> CollectionSpec:
    """
    Look up a collection spec by kind.

    Raises:
        ValueError: If kind is not a known collection
    """
    if kind not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{kind}'. Valid collections: {list(COLLECTIONS)}")
    return COLLECTIONS[kind]


@dataclass
class ResumeAggregate:
    """
    A resume together with all of its owned records.

    Collections are ordered by sort_order ascending (ties in insertion order).
    """

    resume: Resume
    contact_info: Optional[ContactInfo] = None
    summary: Optional[Summary] = None
    experiences: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.resume.id

    @property
    def title(self) -> str:
        return self.resume.title

    def items(self, kind: str) -> list:
        """Return the ordered collection for a collection kind."""
        attribute = {
            "experience": "experiences",
            "education": "education",
            "skill": "skills",
            "project": "projects",
        }[get_collection(kind).kind]
        return getattr(self, attribute)
