from typing import Optional
from fastapi import Request
from vinheria.core.config import settings
from vinheria.core.exceptions import LoginRequired
from vinheria.core.security import read_session_handle
from vinheria.services.access_gate import Redirect, access_gate
from vinheria.services.credential_verifier import VerifiedIdentity


def get_session_handle(request: Request) -> Optional[str]:
    """Session handle from the signed cookie, or None if absent or tampered with"""
    return read_session_handle(request.cookies.get(settings.SESSION_COOKIE_NAME))


async def require_identity(request: Request) -> VerifiedIdentity:
    """
    Access gate for route handlers.

    Resolves the caller's session before the handler body runs, so a
    request without a live session never reaches the ledger. Raises
    LoginRequired, which the app answers with a redirect to the login page.
    """
    outcome = access_gate.guard(get_session_handle(request), lambda identity: identity)
    if isinstance(outcome, Redirect):
        raise LoginRequired(outcome.location)
    return outcome
