"""
Editing Context

Responsibilities:
- Persists resume aggregates (resume, contact info, summary, ordered collections)
- Enforces session and ownership checks before every write
- Assigns collection ordering keys at insertion time
- Duplicates resumes under collision-free "(Copy N)" titles
- Signals which views are stale after a mutation

Owns: Resume storage, ownership checks, mutation results
Never: Decides how a resume looks
"""

from folio.contexts.editing.data_structures import (
    COLLECTIONS,
    ContactInfo,
    Education,
    Experience,
    Project,
    Resume,
    ResumeAggregate,
    ResumeListing,
    Skill,
    Summary,
)
from folio.contexts.editing.duplication import next_copy_title, strip_copy_suffix
from folio.contexts.editing.identity import EnvironmentIdentity, SessionUser, StaticIdentity
from folio.contexts.editing.invalidation import (
    RESUME_LIST_VIEW,
    EventLogInvalidator,
    NullInvalidator,
    RecordingInvalidator,
    editor_view,
)
from folio.contexts.editing.resume_service import ResumeService
from folio.contexts.editing.resume_store import ResumeStore
from folio.contexts.editing.results import ActionError, ActionResult

__all__ = [
    # Data structures
    "COLLECTIONS",
    "ContactInfo",
    "Education",
    "Experience",
    "Project",
    "Resume",
    "ResumeAggregate",
    "ResumeListing",
    "Skill",
    "Summary",
    # Service and collaborators
    "ResumeService",
    "ResumeStore",
    "EnvironmentIdentity",
    "SessionUser",
    "StaticIdentity",
    "EventLogInvalidator",
    "NullInvalidator",
    "RecordingInvalidator",
    "RESUME_LIST_VIEW",
    "editor_view",
    # Results
    "ActionError",
    "ActionResult",
    # Duplication helpers
    "next_copy_title",
    "strip_copy_suffix",
]
