"""Auth service issuing and tearing down dashboard sessions."""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiosqlite
from result import Err, Ok, Result

from projboard.models.session import CurrentUser, SessionContext

if TYPE_CHECKING:
    from projboard.data.protocols import DatabaseProtocol

logger = logging.getLogger(__name__)

_PBKDF2_ITERATIONS = 200_000


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password as ``salt$hexdigest`` using PBKDF2-SHA256."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), _PBKDF2_ITERATIONS
    ).hex()
    return f"{salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    salt, _, _digest = password_hash.partition("$")
    if not salt:
        return False
    return hmac.compare_digest(hash_password(password, salt), password_hash)


class AuthService:
    """Service for user sign-up, sign-in and sign-out."""

    def __init__(self, db: DatabaseProtocol) -> None:
        self._db = db
        self._active_tokens: dict[str, str] = {}

    async def sign_up(self, email: str, password: str, name: str = "") -> Result[SessionContext, str]:
        """Create a user and open a session for it."""
        email = email.strip().lower()
        if not email or not password:
            return Err("Email and password are required")
        user = CurrentUser(id=uuid.uuid4().hex, email=email, name=name.strip())
        try:
            await self._db.write(
                """INSERT INTO users (id, email, name, password_hash, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (user.id, user.email, user.name, hash_password(password), _now()),
            )
        except aiosqlite.IntegrityError:
            return Err(f"User {email} already exists")
        logger.info("Created user %s", email)
        return Ok(self._open_session(user))

    async def find_user(self, email: str) -> CurrentUser | None:
        row = await self._db.fetch_one(
            "SELECT id, email, name FROM users WHERE email = ?", (email.strip().lower(),)
        )
        if row is None:
            return None
        return CurrentUser(id=row["id"], email=row["email"], name=row["name"] or "")

    async def sign_in(self, email: str, password: str) -> Result[SessionContext, str]:
        """Validate credentials and open a session."""
        row = await self._db.fetch_one(
            "SELECT id, email, name, password_hash FROM users WHERE email = ?",
            (email.strip().lower(),),
        )
        if row is None or not verify_password(password, row["password_hash"]):
            return Err("Invalid credentials")
        user = CurrentUser(id=row["id"], email=row["email"], name=row["name"] or "")
        return Ok(self._open_session(user))

    async def sign_out(self, session: SessionContext) -> None:
        """Invalidate the session's token."""
        if self._active_tokens.pop(session.token, None) is not None:
            logger.info("Signed out %s", session.user.email)

    def is_active(self, session: SessionContext) -> bool:
        return session.token in self._active_tokens

    def _open_session(self, user: CurrentUser) -> SessionContext:
        token = secrets.token_urlsafe(32)
        self._active_tokens[token] = user.id
        return SessionContext(user=user, token=token)


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()
