"""
Session Context

Responsibilities:
- Holds per-session collaborators (auth backend, local storage, toasts)
- Stores client-side state in a local key/value file
- Sends requests to the VITAE API (vitae.contexts.session.client)

Owns: SessionContext, AuthBackend, LocalStorage, toasts
Never: Calls the generative API or the table store directly
"""

from vitae.contexts.session.auth import (
    AnonymousAuthBackend,
    AuthBackend,
    AuthError,
    Session,
    SessionContext,
    StaticAuthBackend,
)
from vitae.contexts.session.local_storage import LocalStorage
from vitae.contexts.session.toasts import Toast

__all__ = [
    "SessionContext",
    "Session",
    "AuthBackend",
    "AnonymousAuthBackend",
    "StaticAuthBackend",
    "AuthError",
    "LocalStorage",
    "Toast",
]
