"""
Identity providers.

Authentication and session issuance live outside FOLIO. The service only asks
"who is acting?" through `IdentityProvider.current_user()`; `None` means no
authenticated session.
"""

import os
from dataclasses import dataclass
from typing import Optional, Protocol

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class SessionUser:
    id: str


class IdentityProvider(Protocol):
    def current_user(self) -> Optional[SessionUser]:
        ...


class StaticIdentity:
    """Identity fixed at construction (None for an anonymous caller)."""

    def __init__(self, user_id: Optional[str]):
        self.user_id = user_id

    def current_user(self) -> Optional[SessionUser]:
        if not self.user_id:
            return None
        return SessionUser(id=self.user_id)


class EnvironmentIdentity:
    """
    Identity read from an environment variable on every call.

    Used by the command-line tools, where the acting user is configured in
    `.env` rather than issued by a sign-in flow.
    """

    def __init__(self, variable: str = "FOLIO_USER_ID"):
        self.variable = variable

    def current_user(self) -> Optional[SessionUser]:
        user_id = os.getenv(self.variable, "").strip()
        if not user_id:
            return None
        return SessionUser(id=user_id)
