from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union
from vinheria.core.config import settings
from vinheria.core.exceptions import InvalidSession
from vinheria.services.credential_verifier import VerifiedIdentity
from vinheria.services.session_manager import SessionManager, session_manager

T = TypeVar("T")


@dataclass(frozen=True)
class Redirect:
    location: str


class AccessGate:
    """Runs an operation only for a caller holding a live session"""

    def __init__(self, sessions: SessionManager, login_url: str):
        self._sessions = sessions
        self._login_url = login_url

    def guard(
        self,
        handle: Optional[str],
        operation: Callable[[VerifiedIdentity], T],
    ) -> Union[T, Redirect]:
        try:
            identity = self._sessions.validate(handle)
        except InvalidSession:
            return Redirect(location=self._login_url)
        return operation(identity)


access_gate = AccessGate(session_manager, settings.LOGIN_URL)
