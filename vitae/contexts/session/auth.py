"""
Session and authentication collaborator.

Request builders never reach for a global auth client: they receive a
SessionContext, which carries the AuthBackend, the local storage and the toast
list for one client session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vitae.contexts.session.local_storage import LocalStorage
from vitae.contexts.session.logger import _log_info
from vitae.contexts.session.toasts import Toast


class AuthError(Exception):
    """Raised when an auth backend rejects or cannot perform an operation."""


@dataclass(frozen=True)
class Session:
    """An authenticated user session."""

    user_id: str
    access_token: str
    email: Optional[str] = None


class AuthBackend(ABC):
    """
    Interface to the managed auth service.

    Subclasses must implement get_session(), sign_out(), sign_up() and sign_in().
    """

    @abstractmethod
    def get_session(self) -> Optional[Session]:
        """Current session, or None when signed out."""
        pass

    def get_access_token(self) -> Optional[str]:
        session = self.get_session()
        return session.access_token if session else None

    @abstractmethod
    def sign_out(self) -> None:
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Session:
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Session:
        pass


class AnonymousAuthBackend(AuthBackend):
    """No auth service configured: always signed out."""

    def get_session(self) -> Optional[Session]:
        return None

    def sign_out(self) -> None:
        return None

    def sign_up(self, email: str, password: str) -> Session:
        raise AuthError("Authentication is not configured")

    def sign_in(self, email: str, password: str) -> Session:
        raise AuthError("Authentication is not configured")


class StaticAuthBackend(AuthBackend):
    """
    Backend holding a session obtained elsewhere (e.g., a token from the environment).

    sign_in/sign_up are not supported; sign_out drops the session.
    """

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def get_session(self) -> Optional[Session]:
        return self._session

    def sign_out(self) -> None:
        self._session = None

    def sign_up(self, email: str, password: str) -> Session:
        raise AuthError("Sign up is not supported by a static session")

    def sign_in(self, email: str, password: str) -> Session:
        raise AuthError("Sign in is not supported by a static session")


@dataclass
class SessionContext:
    """
    Per-session collaborators threaded through the client.

    Attributes:
        auth: Auth backend (anonymous by default)
        storage: Client-side key/value store
        toasts: Notifications raised during the session, oldest first
    """

    auth: AuthBackend = field(default_factory=AnonymousAuthBackend)
    storage: LocalStorage = field(default_factory=LocalStorage)
    toasts: List[Toast] = field(default_factory=list)

    @property
    def user_id(self) -> Optional[str]:
        session = self.auth.get_session()
        return session.user_id if session else None

    @property
    def is_logged_in(self) -> bool:
        return self.auth.get_session() is not None

    def auth_headers(self) -> Dict[str, str]:
        """Bearer header for the current session ({} when signed out)."""
        token = self.auth.get_access_token()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)
        _log_info(f"Toast ({toast.variant}): {toast.title}: {toast.description}")

    def sign_out(self) -> None:
        self.auth.sign_out()
        self.notify(Toast("Signed out"))
