"""
Access Policy

Decides whether a request may receive a file's bytes.
Checks run in a fixed order: existence (caller), password, quota.
A failed password check never touches the download counter.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import FileGoneError, InvalidPasswordError

if TYPE_CHECKING:
    from .entities import FileRecord

# Any method werkzeug.security accepts, e.g. "pbkdf2:sha256:600000"
PASSWORD_HASH_METHOD = "scrypt"


def hash_password(password: str) -> str:
    """Salt and hash a password for storage."""
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD)


def verify_password(password: Optional[str], stored: str) -> bool:
    """Check a candidate password against a stored hash."""
    if password is None:
        return False

    try:
        return check_password_hash(stored, password)
    except ValueError:
        return False


class AccessDecision(Enum):
    """Outcome of evaluating a download request."""

    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    GONE = "gone"


class AccessPolicy:
    """Evaluates request credentials against a record's access policy."""

    def evaluate(self, record: "FileRecord", password: Optional[str]) -> AccessDecision:
        if record.is_protected and not verify_password(password, record.password_hash):
            return AccessDecision.FORBIDDEN
        if record.is_exhausted():
            return AccessDecision.GONE
        return AccessDecision.ALLOWED

    def check_password(self, record: "FileRecord", password: Optional[str]) -> None:
        """
        Raises:
            InvalidPasswordError: If the record is protected and the
                password is missing or wrong
        """
        if self.evaluate(record, password) is AccessDecision.FORBIDDEN:
            raise InvalidPasswordError(f"Incorrect password for {record.code}")

    def enforce(self, record: "FileRecord", password: Optional[str]) -> None:
        """
        Raise the domain error matching a non-allowed decision.

        Raises:
            InvalidPasswordError: If the password is missing or wrong
            FileGoneError: If the download quota is exhausted
        """
        decision = self.evaluate(record, password)
        if decision is AccessDecision.FORBIDDEN:
            raise InvalidPasswordError(f"Incorrect password for {record.code}")
        if decision is AccessDecision.GONE:
            raise FileGoneError(f"Download quota exhausted for {record.code}")
