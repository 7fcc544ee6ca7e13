"""Keyed derivation of stable, non-reversible pseudonyms.

A :class:`PseudonymEngine` owns one secret key and maps a ``(user_id,
client_id, data_type)`` triple to an identifier of the form ``ck_`` followed by
16 URL-safe base64 characters.  The mapping is HMAC-SHA256 over the three
trimmed fields, each terminated by its own control byte (``0x00`` after the
user id, ``0x01`` after the client id, ``0x02`` after the data type).

Properties
----------
* Deterministic: the same key and triple always yield the same pseudonym.
* Unlinkable across contexts: changing the client id or the data type yields
  an unrelated pseudonym.
* Non-reversible: without the key the inputs cannot be recovered, and even
  with it the 16-character truncation discards most of the digest.

Security notes
--------------
The separator scheme is not length-prefixed.  A field that itself contains one
of the separator bytes is accepted as-is, so carefully crafted inputs can in
principle collide.  The scheme is kept unchanged because altering it would
change every pseudonym already issued.

:meth:`PseudonymEngine.verify` only checks the *format* of a candidate.  The
embedded fragment is a lossy truncation of the digest, so there is no way to
confirm that a given key produced it.

The key is never logged and never included in ``repr`` or :meth:`info`.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import TYPE_CHECKING, Any, TypedDict

from consentkeys.utils.constants import (
    ALGORITHM,
    DEFAULT_DATA_TYPE,
    FRAGMENT_LENGTH,
    MIN_KEY_LENGTH,
    PREFIX,
    PSEUDONYM_RE,
    SEP_CLIENT,
    SEP_DATA_TYPE,
    SEP_USER,
)
from consentkeys.utils.errors import EmptyFieldError, InvalidKeyError, MissingFieldError

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from consentkeys.config import ConfigModel

__all__ = ["EngineInfo", "PseudonymEngine", "verify_pseudonym"]


class EngineInfo(TypedDict):
    """Public description of an engine's configuration."""

    prefix: str
    keyLength: int
    algorithm: str
    outputLength: int
    version: str


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_key(secret_key: Any) -> str:
    if not secret_key or not isinstance(secret_key, str):
        raise InvalidKeyError("Secret key must be a non-empty string")
    if len(secret_key) < MIN_KEY_LENGTH:
        raise InvalidKeyError(
            f"Secret key must be at least {MIN_KEY_LENGTH} characters long for security"
        )
    return secret_key


def _validate_fields(user_id: Any, client_id: Any, data_type: Any) -> tuple[str, str, str]:
    """Return the trimmed triple or raise for the first offending field.

    Types are checked for all three fields before any emptiness check, so a
    ``None`` client id is reported even when the user id is blank.
    """

    fields = (("userId", user_id), ("clientId", client_id), ("dataType", data_type))
    for name, value in fields:
        if value is None or not isinstance(value, str):
            raise MissingFieldError(name, f"{name} is required and must be a non-empty string")

    trimmed: list[str] = []
    for name, value in fields:
        stripped = value.strip()
        if not stripped:
            raise EmptyFieldError(name, f"{name} cannot be empty or whitespace only")
        trimmed.append(stripped)
    return trimmed[0], trimmed[1], trimmed[2]


# ---------------------------------------------------------------------------
# Format check
# ---------------------------------------------------------------------------


def verify_pseudonym(candidate: object) -> bool:
    """Return ``True`` if ``candidate`` has the shape of a pseudonym.

    This is a format check only; see the module notes.  Never raises.
    """

    if not isinstance(candidate, str):
        return False
    return PSEUDONYM_RE.fullmatch(candidate) is not None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class PseudonymEngine:
    """Derive deterministic pseudonyms from a secret key."""

    __slots__ = ("_key", "_key_length")

    prefix = PREFIX

    def __init__(self, secret_key: str) -> None:
        """Validate and hold ``secret_key``.

        Raises
        ------
        InvalidKeyError
            If the key is empty, not a string or shorter than 32 characters.
        """

        self._key: bytes = _validate_key(secret_key).encode("utf-8")
        self._key_length = len(secret_key)

    @classmethod
    def from_config(cls, cfg: ConfigModel) -> PseudonymEngine:
        """Build an engine from the secret referenced by ``cfg``."""

        secret = cfg.engine.secret.secret
        if secret is None:
            raise InvalidKeyError(
                f"Missing secret key; set {cfg.engine.secret.secret_env} or engine.secret.secret"
            )
        return cls(secret.get_secret_value())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key=<{self._key_length} chars>)"

    def derive(self, user_id: str, client_id: str, data_type: str = DEFAULT_DATA_TYPE) -> str:
        """Return the pseudonym for ``(user_id, client_id, data_type)``.

        Surrounding whitespace of every field is ignored.

        Raises
        ------
        MissingFieldError
            If a field is ``None`` or not a string.
        EmptyFieldError
            If a field is empty after trimming.
        """

        user, client, kind = _validate_fields(user_id, client_id, data_type)
        message = f"{user}{SEP_USER}{client}{SEP_CLIENT}{kind}{SEP_DATA_TYPE}".encode("utf-8")
        digest = hmac.new(self._key, message, hashlib.sha256).digest()
        fragment = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
        return PREFIX + fragment[:FRAGMENT_LENGTH]

    @staticmethod
    def verify(candidate: object) -> bool:
        """Return ``True`` if ``candidate`` is formatted like a pseudonym."""

        return verify_pseudonym(candidate)

    def info(self) -> EngineInfo:
        """Describe the engine without revealing the key."""

        from consentkeys import __version__

        return {
            "prefix": PREFIX,
            "keyLength": self._key_length,
            "algorithm": ALGORITHM,
            "outputLength": FRAGMENT_LENGTH,
            "version": __version__,
        }
