"""
File Storage Value Objects

Immutable value objects for type safety and validation.
"""

import secrets
from dataclasses import dataclass

# Digits 2-9 and uppercase letters without 0, O, 1, I
CODE_ALPHABET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZ"
CODE_LENGTH = 6


class InvalidShareCodeError(ValueError):
    """Raised when a share code is malformed."""
    pass


@dataclass(frozen=True)
class ShareCode:
    """
    Value object representing a validated share code.

    Codes are case-insensitive on input and always stored uppercase.
    They are public identifiers, not secrets: passwords and download
    quotas are the access controls.
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidShareCodeError("Share code must be a string")

        normalized = self.value.strip().upper()
        if not self._is_valid(normalized):
            raise InvalidShareCodeError(
                f"Invalid share code: expected {CODE_LENGTH} characters "
                f"from {CODE_ALPHABET!r}"
            )
        object.__setattr__(self, "value", normalized)

    @staticmethod
    def _is_valid(value: str) -> bool:
        if len(value) != CODE_LENGTH:
            return False
        return all(c in CODE_ALPHABET for c in value)

    @classmethod
    def generate(cls) -> "ShareCode":
        """
        Draw a new code uniformly from the alphabet.

        Uniqueness is not guaranteed here; the registry checks it.
        """
        return cls("".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH)))

    @classmethod
    def normalize(cls, raw: str) -> str:
        """Validate raw input and return its canonical form."""
        return cls(raw).value

    def __str__(self) -> str:
        return self.value
