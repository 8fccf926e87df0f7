"""
Resume Service

Single entry point for reading a resume aggregate and mutating any part of it.

Every operation resolves the acting user first. Without a session, mutations
return an UNAUTHORIZED result and reads return nothing. Every mutation then
checks ownership of the target resume explicitly before writing; a resume that
does not exist and a resume owned by someone else both yield NOT_FOUND, so
callers cannot probe for other users' ids.

Store failures (sqlite3.Error) are not caught here and reach the caller as-is.
"""

from typing import List, Optional, Tuple, Union

from folio.contexts.editing.data_structures import (
    ResumeAggregate,
    ResumeListing,
    get_collection,
)
from folio.contexts.editing.duplication import duplicate_aggregate
from folio.contexts.editing.identity import IdentityProvider, SessionUser
from folio.contexts.editing.invalidation import (
    RESUME_LIST_VIEW,
    NullInvalidator,
    ViewInvalidator,
    editor_view,
)
from folio.contexts.editing.logger import log_mutation, log_rejected
from folio.contexts.editing.resume_store import ResumeStore
from folio.contexts.editing.results import ActionError, ActionResult

DEFAULT_TITLE = "Untitled Resume"


class ResumeService:
    """
    Ownership-guarded operations over resume aggregates.

    Args:
        identity: Supplies the acting user for every call
        store: Persistence gateway
        invalidator: Receives the names of views made stale by a mutation
                     (defaults to a NullInvalidator that drops signals)
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: ResumeStore,
        invalidator: ViewInvalidator = None,
    ):
        self.identity = identity
        self.store = store
        self.invalidator = invalidator or NullInvalidator()

    # Guards

    def _authorize(
        self, operation: str, resume_id: str
    ) -> Union[ActionResult, Tuple[SessionUser, str]]:
        """
        Resolve the session and check ownership of `resume_id`.

        Returns:
            (user, resume_id) when allowed, otherwise the rejecting ActionResult
        """
        user = self.identity.current_user()
        if user is None:
            log_rejected(operation, ActionError.UNAUTHORIZED.value, resume_id)
            return ActionResult.unauthorized()

        if self.store.find_resume(resume_id, user.id) is None:
            log_rejected(operation, ActionError.NOT_FOUND.value, resume_id)
            return ActionResult.not_found()

        return user, resume_id

    def _edited(self, operation: str, resume_id: str, detail: str = "") -> ActionResult:
        """Finish a successful child mutation: bump updated_at, signal the editor view."""
        self.store.touch_resume(resume_id)
        self.invalidator.invalidate(editor_view(resume_id))
        log_mutation(operation, resume_id, detail)
        return ActionResult.ok()

    # Resumes

    def create_resume(self) -> ActionResult:
        """
        Create an "Untitled Resume" with an empty contact row.

        Returns:
            Successful result carrying the new resume_id
        """
        user = self.identity.current_user()
        if user is None:
            log_rejected("create_resume", ActionError.UNAUTHORIZED.value)
            return ActionResult.unauthorized()

        with self.store.transaction():
            resume = self.store.insert_resume(user.id, DEFAULT_TITLE)
            self.store.upsert_contact_info(resume.id, {})

        self.invalidator.invalidate(RESUME_LIST_VIEW)
        log_mutation("create_resume", resume.id)
        return ActionResult.ok(resume_id=resume.id)

    def list_resumes(self) -> List[ResumeListing]:
        """The caller's resumes, most recently updated first (empty without a session)."""
        user = self.identity.current_user()
        if user is None:
            return []
        return self.store.list_resumes(user.id)

    def get_resume(self, resume_id: str) -> Optional[ResumeAggregate]:
        """
        Load a full resume aggregate.

        Returns:
            The aggregate, or None when there is no session or the resume is
            missing or owned by someone else
        """
        user = self.identity.current_user()
        if user is None:
            return None

        resume = self.store.find_resume(resume_id, user.id)
        if resume is None:
            return None

        return self.store.load_aggregate(resume)

    def delete_resume(self, resume_id: str) -> ActionResult:
        """Delete a resume and everything it owns."""
        guard = self._authorize("delete_resume", resume_id)
        if isinstance(guard, ActionResult):
            return guard

        self.store.delete_resume(resume_id)
        self.invalidator.invalidate(editor_view(resume_id))
        self.invalidator.invalidate(RESUME_LIST_VIEW)
        log_mutation("delete_resume", resume_id)
        return ActionResult.ok()

    def rename_resume(self, resume_id: str, title: str) -> ActionResult:
        """Change a resume's title."""
        guard = self._authorize("rename_resume", resume_id)
        if isinstance(guard, ActionResult):
            return guard
        user, _ = guard

        if self.store.update_resume_title(resume_id, user.id, title) == 0:
            return ActionResult.not_found()

        self.invalidator.invalidate(editor_view(resume_id))
        self.invalidator.invalidate(RESUME_LIST_VIEW)
        log_mutation("rename_resume", resume_id, f"title={title!r}")
        return ActionResult.ok()

    def duplicate_resume(self, resume_id: str) -> ActionResult:
        """
        Copy a resume and all its records under a "(Copy N)" title.

        Returns:
            Successful result carrying the new resume_id
        """
        guard = self._authorize("duplicate_resume", resume_id)
        if isinstance(guard, ActionResult):
            return guard
        user, _ = guard

        source = self.get_resume(resume_id)
        if source is None:
            return ActionResult.not_found()

        new_id = duplicate_aggregate(self.store, source, user.id)
        self.invalidator.invalidate(RESUME_LIST_VIEW)
        return ActionResult.ok(resume_id=new_id)

    # One-to-one sections

    def update_contact_info(self, resume_id: str, **fields: Optional[str]) -> ActionResult:
        """
        Create or patch the contact row. Only the supplied fields are written.

        Raises:
            ValueError: If a field name is not a contact field
        """
        guard = self._authorize("update_contact_info", resume_id)
        if isinstance(guard, ActionResult):
            return guard

        self.store.upsert_contact_info(resume_id, fields)
        return self._edited("update_contact_info", resume_id, ", ".join(sorted(fields)))

    def update_summary(self, resume_id: str, content: str) -> ActionResult:
        """Create or replace the summary."""
        guard = self._authorize("update_summary", resume_id)
        if isinstance(guard, ActionResult):
            return guard

        self.store.upsert_summary(resume_id, content)
        return self._edited("update_summary", resume_id)

    # Ordered collections

    def add_item(self, kind: str, resume_id: str, **seed) -> ActionResult:
        """
        Append a row to a collection with sort_order = number of existing rows.

        Args:
            kind: "experience", "education", "skill" or "project"
            resume_id: Owning resume
            **seed: Initial field values (blank defaults otherwise)

        Raises:
            ValueError: If kind or a seed field is unknown
        """
        guard = self._authorize(f"add_{kind}", resume_id)
        if isinstance(guard, ActionResult):
            return guard

        spec = get_collection(kind)
        columns = spec.to_columns({**spec.defaults, **seed})

        with self.store.transaction():
            sort_order = self.store.count_items(kind, resume_id)
            item = self.store.insert_item(kind, resume_id, sort_order, columns)

        return self._edited(f"add_{kind}", resume_id, f"{item.id} at sort_order {sort_order}")

    def update_item(self, kind: str, item_id: str, resume_id: str, **fields) -> ActionResult:
        """
        Patch the supplied fields of one collection row.

        Returns NOT_FOUND when the row does not belong to `resume_id`.

        Raises:
            ValueError: If kind or a field is unknown, or a date is malformed
        """
        guard = self._authorize(f"update_{kind}", resume_id)
        if isinstance(guard, ActionResult):
            return guard

        columns = get_collection(kind).to_columns(fields)

        if self.store.update_item(kind, item_id, resume_id, columns) == 0:
            log_rejected(f"update_{kind}", ActionError.NOT_FOUND.value, item_id)
            return ActionResult.not_found()

        return self._edited(f"update_{kind}", resume_id, item_id)

    def delete_item(self, kind: str, item_id: str, resume_id: str) -> ActionResult:
        """Delete one collection row; the others keep their sort_order."""
        guard = self._authorize(f"delete_{kind}", resume_id)
        if isinstance(guard, ActionResult):
            return guard

        get_collection(kind)

        if self.store.delete_item(kind, item_id, resume_id) == 0:
            log_rejected(f"delete_{kind}", ActionError.NOT_FOUND.value, item_id)
            return ActionResult.not_found()

        return self._edited(f"delete_{kind}", resume_id, item_id)

    # Per-collection operations

    def add_experience(self, resume_id: str, **seed) -> ActionResult:
        return self.add_item("experience", resume_id, **seed)

    def update_experience(self, item_id: str, resume_id: str, **fields) -> ActionResult:
        return self.update_item("experience", item_id, resume_id, **fields)

    def delete_experience(self, item_id: str, resume_id: str) -> ActionResult:
        return self.delete_item("experience", item_id, resume_id)

    def add_education(self, resume_id: str, **seed) -> ActionResult:
        return self.add_item("education", resume_id, **seed)

    def update_education(self, item_id: str, resume_id: str, **fields) -> ActionResult:
        return self.update_item("education", item_id, resume_id, **fields)

    def delete_education(self, item_id: str, resume_id: str) -> ActionResult:
        return self.delete_item("education", item_id, resume_id)

    def add_skill(self, resume_id: str, name: str = "") -> ActionResult:
        return self.add_item("skill", resume_id, name=name)

    def update_skill(self, item_id: str, resume_id: str, **fields) -> ActionResult:
        return self.update_item("skill", item_id, resume_id, **fields)

    def delete_skill(self, item_id: str, resume_id: str) -> ActionResult:
        return self.delete_item("skill", item_id, resume_id)

    def add_project(self, resume_id: str, **seed) -> ActionResult:
        return self.add_item("project", resume_id, **seed)

    def update_project(self, item_id: str, resume_id: str, **fields) -> ActionResult:
        return self.update_item("project", item_id, resume_id, **fields)

    def delete_project(self, item_id: str, resume_id: str) -> ActionResult:
        return self.delete_item("project", item_id, resume_id)
