"""
Persistent SQLite store for resume aggregates.

Provides typed, id-keyed access to resumes and their owned records. The store
performs no authorization: ownership is decided by the caller (ResumeService)
and passed in as explicit predicates.
"""

import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from folio.contexts.editing.data_structures import (
    COLLECTIONS,
    CONTACT_FIELDS,
    ContactInfo,
    Resume,
    ResumeAggregate,
    ResumeListing,
    Summary,
    get_collection,
)
from folio.contexts.editing.logger import _log_debug
from folio.utils.timestamp import now_exact

SCHEMA = """
CREATE TABLE IF NOT EXISTS resumes (
    id TEXT PRIMARY KEY,
    owner_id TEXT NOT NULL,
    title TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_resumes_owner ON resumes(owner_id);

CREATE TABLE IF NOT EXISTS contact_info (
    id TEXT PRIMARY KEY,
    resume_id TEXT NOT NULL UNIQUE REFERENCES resumes(id) ON DELETE CASCADE,
    full_name TEXT,
    email TEXT,
    phone TEXT,
    location TEXT,
    linkedin TEXT,
    github TEXT,
    website TEXT
);

CREATE TABLE IF NOT EXISTS summaries (
    id TEXT PRIMARY KEY,
    resume_id TEXT NOT NULL UNIQUE REFERENCES resumes(id) ON DELETE CASCADE,
    content TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS experiences (
    id TEXT PRIMARY KEY,
    resume_id TEXT NOT NULL REFERENCES resumes(id) ON DELETE CASCADE,
    company TEXT NOT NULL,
    position TEXT NOT NULL,
    location TEXT,
    start_date TEXT,
    end_date TEXT,
    current INTEGER NOT NULL DEFAULT 0,
    description TEXT,
    sort_order INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_experiences_resume ON experiences(resume_id);

CREATE TABLE IF NOT EXISTS education (
    id TEXT PRIMARY KEY,
    resume_id TEXT NOT NULL REFERENCES resumes(id) ON DELETE CASCADE,
    institution TEXT NOT NULL,
    degree TEXT NOT NULL,
    field TEXT,
    start_date TEXT,
    end_date TEXT,
    current INTEGER NOT NULL DEFAULT 0,
    description TEXT,
    sort_order INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_education_resume ON education(resume_id);

CREATE TABLE IF NOT EXISTS skills (
    id TEXT PRIMARY KEY,
    resume_id TEXT NOT NULL REFERENCES resumes(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    sort_order INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_skills_resume ON skills(resume_id);

CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    resume_id TEXT NOT NULL REFERENCES resumes(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    url TEXT,
    description TEXT,
    sort_order INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_projects_resume ON projects(resume_id);
"""


def new_id() -> str:
    """Generate an opaque record id."""
    return uuid.uuid4().hex


class ResumeStore:
    """
    SQLite-backed persistence gateway for resume aggregates.

    The database is persistent: create it once with ResumeStore.create(), then
    open it later by instantiating with the db_path.

    Every write method joins the surrounding transaction() if one is open, so
    multi-step operations (create with contact row, duplicate, cascade delete)
    are committed or rolled back as a unit.
    """

    def __init__(self, db_path: Path):
        """
        Open an existing database from disk.

        To create a new database, use ResumeStore.create() instead.

        Args:
            db_path: Path to existing SQLite database file

        Raises:
            FileNotFoundError: If database file doesn't exist
        """
        self.db_path = db_path

        if not db_path.exists():
            raise FileNotFoundError(
                f"Database not found: {db_path}\n"
                f"To create a new database, use ResumeStore.create()"
            )

        self.conn = sqlite3.connect(str(db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        self._depth = 0

    @classmethod
    def create(cls, db_path: Path) -> "ResumeStore":
        """
        Create the schema (if missing) and open the database.

        Existing data is kept, so this is also safe to call on an existing file.

        Args:
            db_path: Path where the database lives

        Returns:
            ResumeStore connected to the database
        """
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        conn.executescript(SCHEMA)
        conn.commit()
        conn.close()

        return cls(db_path)

    def close(self) -> None:
        self.conn.close()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Group writes into one all-or-nothing unit.

        Re-entrant: only the outermost block commits. Any exception rolls back
        everything written since the outermost block opened, then propagates.
        """
        self._depth += 1
        try:
            yield
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self.conn.rollback()
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                self.conn.commit()

    def query(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """
        Execute SQL query and return results as list of dicts.

        Args:
            sql: SQL query string
            params: Query parameters (for parameterized queries)

        Returns:
            List of dicts with column names as keys
        """
        cursor = self.conn.execute(sql, params)
        return [dict(row) for row in cursor.fetchall()]

    # Resumes

    def insert_resume(self, owner_id: str, title: str) -> Resume:
        timestamp = now_exact()
        resume = Resume(
            id=new_id(),
            owner_id=owner_id,
            title=title,
            created_at=timestamp,
            updated_at=timestamp,
        )
        with self.transaction():
            self.conn.execute(
                """
                INSERT INTO resumes (id, owner_id, title, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (resume.id, resume.owner_id, resume.title, resume.created_at, resume.updated_at),
            )
        _log_debug(f"Inserted resume {resume.id} for owner {owner_id}")
        return resume

    def find_resume(self, resume_id: str, owner_id: str) -> Optional[Resume]:
        """Owner-scoped lookup: None when the id is unknown or belongs to another owner."""
        row = self.conn.execute(
            "SELECT * FROM resumes WHERE id = ? AND owner_id = ?",
            (resume_id, owner_id),
        ).fetchone()
        return Resume.from_row(row) if row else None

    def list_resumes(self, owner_id: str) -> List[ResumeListing]:
        rows = self.conn.execute(
            """
            SELECT id, title, updated_at FROM resumes
            WHERE owner_id = ?
            ORDER BY updated_at DESC, rowid DESC
            """,
            (owner_id,),
        ).fetchall()
        return [ResumeListing(id=row["id"], title=row["title"], updated_at=row["updated_at"]) for row in rows]

    def titles_with_prefix(self, owner_id: str, prefix: str) -> List[str]:
        """All of an owner's resume titles that start with `prefix` (case-sensitive)."""
        rows = self.conn.execute(
            "SELECT title FROM resumes WHERE owner_id = ? AND substr(title, 1, ?) = ?",
            (owner_id, len(prefix), prefix),
        ).fetchall()
        return [row["title"] for row in rows]

    def update_resume_title(self, resume_id: str, owner_id: str, title: str) -> int:
        """Returns the number of rows updated (0 when id/owner do not match)."""
        with self.transaction():
            cursor = self.conn.execute(
                "UPDATE resumes SET title = ?, updated_at = ? WHERE id = ? AND owner_id = ?",
                (title, now_exact(), resume_id, owner_id),
            )
        return cursor.rowcount

    def touch_resume(self, resume_id: str) -> None:
        """Refresh a resume's updated_at after a change to one of its children."""
        with self.transaction():
            self.conn.execute(
                "UPDATE resumes SET updated_at = ? WHERE id = ?",
                (now_exact(), resume_id),
            )

    def delete_resume(self, resume_id: str) -> int:
        """
        Delete a resume and every record it owns.

        Children are deleted explicitly before the parent, inside one
        transaction, so the result does not depend on foreign key enforcement.

        Returns:
            Number of resume rows deleted (0 or 1)
        """
        with self.transaction():
            for spec in COLLECTIONS.values():
                self.conn.execute(f"DELETE FROM {spec.table} WHERE resume_id = ?", (resume_id,))
            self.conn.execute("DELETE FROM contact_info WHERE resume_id = ?", (resume_id,))
            self.conn.execute("DELETE FROM summaries WHERE resume_id = ?", (resume_id,))
            cursor = self.conn.execute("DELETE FROM resumes WHERE id = ?", (resume_id,))
        _log_debug(f"Deleted resume {resume_id} with all owned records")
        return cursor.rowcount

    # One-to-one records

    def get_contact_info(self, resume_id: str) -> Optional[ContactInfo]:
        row = self.conn.execute(
            "SELECT * FROM contact_info WHERE resume_id = ?", (resume_id,)
        ).fetchone()
        return ContactInfo.from_row(row) if row else None

    def upsert_contact_info(self, resume_id: str, values: Dict[str, Optional[str]]) -> None:
        """
        Create the contact row if absent, else patch only the supplied fields.

        Raises:
            ValueError: If values contain an unknown contact field
        """
        unknown = set(values) - set(CONTACT_FIELDS)
        if unknown:
            raise ValueError(
                f"Unknown contact field(s): {sorted(unknown)}. Valid fields: {list(CONTACT_FIELDS)}"
            )

        with self.transaction():
            exists = self.conn.execute(
                "SELECT 1 FROM contact_info WHERE resume_id = ?", (resume_id,)
            ).fetchone()
            if exists is None:
                self._insert_row("contact_info", {"id": new_id(), "resume_id": resume_id, **values})
            elif values:
                assignments = ", ".join(f"{name} = ?" for name in values)
                self.conn.execute(
                    f"UPDATE contact_info SET {assignments} WHERE resume_id = ?",
                    (*values.values(), resume_id),
                )

    def get_summary(self, resume_id: str) -> Optional[Summary]:
        row = self.conn.execute(
            "SELECT * FROM summaries WHERE resume_id = ?", (resume_id,)
        ).fetchone()
        return Summary.from_row(row) if row else None

    def upsert_summary(self, resume_id: str, content: str) -> None:
        """Create the summary row if absent, else replace its content."""
        with self.transaction():
            cursor = self.conn.execute(
                "UPDATE summaries SET content = ? WHERE resume_id = ?",
                (content, resume_id),
            )
            if cursor.rowcount == 0:
                self._insert_row(
                    "summaries", {"id": new_id(), "resume_id": resume_id, "content": content}
                )

    # Ordered collections

    def count_items(self, kind: str, resume_id: str) -> int:
        spec = get_collection(kind)
        row = self.conn.execute(
            f"SELECT COUNT(*) AS count FROM {spec.table} WHERE resume_id = ?", (resume_id,)
        ).fetchone()
        return row["count"]

    def list_items(self, kind: str, resume_id: str) -> list:
        """Rows of one collection, sort_order ascending, ties in insertion order."""
        spec = get_collection(kind)
        rows = self.conn.execute(
            f"SELECT * FROM {spec.table} WHERE resume_id = ? ORDER BY sort_order ASC, rowid ASC",
            (resume_id,),
        ).fetchall()
        return [spec.model.from_row(row) for row in rows]

    def insert_item(
        self, kind: str, resume_id: str, sort_order: int, columns: Dict[str, Any]
    ):
        """
        Insert one collection row.

        Args:
            kind: Collection kind ("experience", "education", "skill", "project")
            resume_id: Owning resume
            sort_order: Ordering key for the new row
            columns: Storage column values (see CollectionSpec.to_columns)

        Returns:
            The inserted item as its data class
        """
        spec = get_collection(kind)
        item_id = new_id()
        with self.transaction():
            self._insert_row(
                spec.table,
                {"id": item_id, "resume_id": resume_id, "sort_order": sort_order, **columns},
            )
        row = self.conn.execute(f"SELECT * FROM {spec.table} WHERE id = ?", (item_id,)).fetchone()
        return spec.model.from_row(row)

    def update_item(
        self, kind: str, item_id: str, resume_id: str, columns: Dict[str, Any]
    ) -> int:
        """
        Patch one collection row, scoped by both its id and its resume.

        Returns:
            Number of rows matched (0 when the id does not belong to the resume)
        """
        spec = get_collection(kind)
        if not columns:
            row = self.conn.execute(
                f"SELECT 1 FROM {spec.table} WHERE id = ? AND resume_id = ?",
                (item_id, resume_id),
            ).fetchone()
            return 1 if row else 0

        assignments = ", ".join(f"{name} = ?" for name in columns)
        with self.transaction():
            cursor = self.conn.execute(
                f"UPDATE {spec.table} SET {assignments} WHERE id = ? AND resume_id = ?",
                (*columns.values(), item_id, resume_id),
            )
        return cursor.rowcount

    def delete_item(self, kind: str, item_id: str, resume_id: str) -> int:
        """Delete one collection row. Remaining rows keep their sort_order."""
        spec = get_collection(kind)
        with self.transaction():
            cursor = self.conn.execute(
                f"DELETE FROM {spec.table} WHERE id = ? AND resume_id = ?",
                (item_id, resume_id),
            )
        return cursor.rowcount

    # Aggregate

    def load_aggregate(self, resume: Resume) -> ResumeAggregate:
        """Load every record owned by an already-authorized resume."""
        return ResumeAggregate(
            resume=resume,
            contact_info=self.get_contact_info(resume.id),
            summary=self.get_summary(resume.id),
            experiences=self.list_items("experience", resume.id),
            education=self.list_items("education", resume.id),
            skills=self.list_items("skill", resume.id),
            projects=self.list_items("project", resume.id),
        )

    def _insert_row(self, table: str, values: Dict[str, Any]) -> None:
        columns = ", ".join(values)
        placeholders = ", ".join("?" * len(values))
        self.conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            tuple(values.values()),
        )
