"""Session Guard — account credentials and the single client session.

Invariants:
    - At most one authenticated identity at a time (single-client model)
    - is_authenticated() is derived from current_user(), never stored separately
    - Passwords are stored only as passlib hashes
    - A failed login leaves the previous session untouched
    - require_authenticated() is the one gate every mutating store call goes through

Design Decisions:
    - passlib CryptContext with pbkdf2_sha256: pure-Python backend, no native bcrypt build
    - Accounts keyed by normalized (lower-cased, stripped) email
"""

import logging
import re
import threading
import uuid
from dataclasses import dataclass

from passlib.context import CryptContext

from worknearby.core.domain_types import UserId
from worknearby.core.errors import (
    AuthenticationError, ConflictError, UnauthorizedError, ValidationError,
)

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass
class _Account:
    user_id: UserId
    email: str
    password_hash: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


class SessionGuard:
    """Owns accounts and the current session."""

    def __init__(self, password_min_length: int = 6) -> None:
        self._password_min_length = password_min_length
        self._accounts: dict[str, _Account] = {}
        self._current: UserId | None = None
        self._lock = threading.Lock()

    # --- Accounts ------------------------------------------------------------

    def register_account(self, email: str, password: str) -> UserId:
        """Create an account and return its identity. Does not log in."""
        key = normalize_email(email or "")
        if not _EMAIL_RE.match(key):
            raise ValidationError("A valid email is required", field="email")
        if len(password or "") < self._password_min_length:
            raise ValidationError(
                f"Password must be at least {self._password_min_length} characters",
                field="password",
            )
        with self._lock:
            if key in self._accounts:
                raise ConflictError(
                    f"Email '{key}' is already registered", field="email",
                )
            account = _Account(
                user_id=UserId(str(uuid.uuid4())),
                email=key,
                password_hash=pwd_context.hash(password),
            )
            self._accounts[key] = account
        logger.info("Account registered", extra={"user_id": account.user_id})
        return account.user_id

    def email_of(self, user_id: UserId) -> str | None:
        for account in self._accounts.values():
            if account.user_id == user_id:
                return account.email
        return None

    # --- Session -------------------------------------------------------------

    def login(self, credentials: Credentials) -> UserId:
        account = self._accounts.get(normalize_email(credentials.email or ""))
        if account is None or not pwd_context.verify(
            credentials.password or "", account.password_hash,
        ):
            logger.warning("Login rejected")
            raise AuthenticationError()
        with self._lock:
            self._current = account.user_id
        logger.info("Session started", extra={"user_id": account.user_id})
        return account.user_id

    def logout(self) -> None:
        with self._lock:
            previous, self._current = self._current, None
        if previous is not None:
            logger.info("Session ended", extra={"user_id": previous})

    def current_user(self) -> UserId | None:
        return self._current

    def is_authenticated(self) -> bool:
        return self._current is not None

    def require_authenticated(self, action: str) -> UserId:
        """Return the current identity or raise UnauthorizedError."""
        current = self._current
        if current is None:
            raise UnauthorizedError(action)
        return current
