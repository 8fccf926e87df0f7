"""Tagged results returned across the resume service boundary."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ActionError(str, Enum):
    """
    Failure reasons a mutation can report without raising.

    UNAUTHORIZED: No authenticated identity.
    NOT_FOUND: Resource absent or owned by someone else (deliberately conflated).
    """

    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "Not found"


@dataclass(frozen=True)
class ActionResult:
    """
    Outcome of a resume mutation.

    Attributes:
        success: Whether the mutation was applied
        error: Failure reason when success is False
        resume_id: Resume created by the operation (create/duplicate only)
    """

    success: bool
    error: Optional[ActionError] = None
    resume_id: Optional[str] = None

    @classmethod
    def ok(cls, resume_id: Optional[str] = None) -> "ActionResult":
        return cls(success=True, resume_id=resume_id)

    @classmethod
    def unauthorized(cls) -> "ActionResult":
        return cls(success=False, error=ActionError.UNAUTHORIZED)

    @classmethod
    def not_found(cls) -> "ActionResult":
        return cls(success=False, error=ActionError.NOT_FOUND)

    def __bool__(self) -> bool:
        return self.success
