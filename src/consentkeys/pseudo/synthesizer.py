"""Deterministic fake profile fields derived from pseudonyms.

Each field is produced from its own pseudonym (``data_type`` ``"email"``,
``"name"``, ``"address"`` or ``"id"``), so fields of one profile are not
correlated with each other.  Name and address fields hash the pseudonym with
plain SHA-256 and use individual digest bytes as indices into the
:class:`~consentkeys.pseudo.pools.LookupPools`:

========  ==========================================================
byte      use
========  ==========================================================
0         first name (name) / street number ``% 9999 + 1`` (address)
1         last name (name) / street name (address)
2         city
3         state
4, 5      big-endian 16-bit value, ``% 90000 + 10000`` for the zip
========  ==========================================================
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from consentkeys.utils.constants import DEFAULT_DATA_TYPE, DEFAULT_EMAIL_DOMAIN
from consentkeys.utils.errors import InvalidBulkInputError, PseudonymError
from consentkeys.utils.logging import get_logger

from .engine import PseudonymEngine
from .pools import DEFAULT_POOLS, LookupPools

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from consentkeys.config import ConfigModel

__all__ = ["BulkError", "FakeAddress", "FakeProfile", "ProfileSynthesizer"]

log = get_logger(__name__)


@dataclass(frozen=True)
class FakeAddress:
    """Synthesized postal address."""

    street: str
    city: str
    state: str
    zip: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class FakeProfile:
    """Bundle of the synthesized fields for one user and client."""

    id: str
    email: str
    display_name: str
    address: FakeAddress

    def as_dict(self) -> dict[str, Any]:
        """Return the profile with ``displayName`` spelled as in the JSON output."""

        return {
            "id": self.id,
            "email": self.email,
            "displayName": self.display_name,
            "address": self.address.as_dict(),
        }


@dataclass(frozen=True)
class BulkError:
    """Failure recorded in place of a pseudonym by bulk derivation."""

    error: str
    kind: str

    @classmethod
    def from_exception(cls, exc: Exception) -> BulkError:
        return cls(error=str(exc), kind=type(exc).__name__)

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


def _digest(pseudonym: str) -> bytes:
    return hashlib.sha256(pseudonym.encode("utf-8")).digest()


class ProfileSynthesizer:
    """Expand pseudonyms into fake emails, display names and addresses."""

    def __init__(
        self,
        engine: PseudonymEngine,
        pools: LookupPools = DEFAULT_POOLS,
        *,
        email_domain: str = DEFAULT_EMAIL_DOMAIN,
    ) -> None:
        if not email_domain:
            raise ValueError("email_domain must be a non-empty string")
        self.engine = engine
        self.pools = pools
        self.email_domain = email_domain

    @classmethod
    def from_config(
        cls, cfg: ConfigModel, engine: PseudonymEngine | None = None
    ) -> ProfileSynthesizer:
        """Build a synthesizer (and, if needed, its engine) from ``cfg``."""

        if engine is None:
            engine = PseudonymEngine.from_config(cfg)
        return cls(
            engine,
            LookupPools.from_settings(cfg.synthesizer.pools),
            email_domain=cfg.synthesizer.email_domain,
        )

    # -- Single fields -----------------------------------------------------

    def generate_fake_email(self, user_id: str, client_id: str) -> str:
        """Return ``<fragment>@<email_domain>`` for the ``"email"`` pseudonym."""

        pseudonym = self.engine.derive(user_id, client_id, "email")
        local = pseudonym.removeprefix(self.engine.prefix)
        return f"{local}@{self.email_domain}"

    def generate_fake_display_name(self, user_id: str, client_id: str) -> str:
        """Return ``"<first> <last>"`` chosen by the ``"name"`` pseudonym."""

        h = _digest(self.engine.derive(user_id, client_id, "name"))
        first = self.pools.first_names[h[0] % len(self.pools.first_names)]
        last = self.pools.last_names[h[1] % len(self.pools.last_names)]
        return f"{first} {last}"

    def generate_fake_address(self, user_id: str, client_id: str) -> FakeAddress:
        """Return an address chosen by the ``"address"`` pseudonym."""

        h = _digest(self.engine.derive(user_id, client_id, "address"))
        pools = self.pools
        number = h[0] % 9999 + 1
        street = pools.street_names[h[1] % len(pools.street_names)]
        zip_code = ((h[4] << 8) | h[5]) % 90000 + 10000
        return FakeAddress(
            street=f"{number} {street}",
            city=pools.cities[h[2] % len(pools.cities)],
            state=pools.states[h[3] % len(pools.states)],
            zip=f"{zip_code:05d}",
        )

    def generate_fake_profile(self, user_id: str, client_id: str) -> FakeProfile:
        """Return id, email, display name and address for one user and client."""

        return FakeProfile(
            id=self.engine.derive(user_id, client_id, "id"),
            email=self.generate_fake_email(user_id, client_id),
            display_name=self.generate_fake_display_name(user_id, client_id),
            address=self.generate_fake_address(user_id, client_id),
        )

    # -- Bulk ----------------------------------------------------------------

    def generate_bulk_pseudonyms(
        self,
        user_ids: list[str] | tuple[str, ...],
        client_id: str,
        data_type: str = DEFAULT_DATA_TYPE,
    ) -> dict[str, str | BulkError]:
        """Derive a pseudonym for every entry of ``user_ids``.

        Unlike the other operations this one does not stop at the first
        failure: an entry that fails validation maps to a :class:`BulkError`
        and the remaining entries are still processed.  Non-string entries are
        keyed by ``str(entry)``; repeated entries collapse onto one key.

        Raises
        ------
        InvalidBulkInputError
            If ``user_ids`` is not a list or tuple.
        """

        if not isinstance(user_ids, (list, tuple)):
            raise InvalidBulkInputError("userIds must be an array")

        results: dict[str, str | BulkError] = {}
        failures = 0
        for user_id in user_ids:
            # Python str() keys: None maps to "None", never "null"
            key = user_id if isinstance(user_id, str) else str(user_id)
            try:
                results[key] = self.engine.derive(user_id, client_id, data_type)
            except PseudonymError as exc:
                results[key] = BulkError.from_exception(exc)
                failures += 1
        log.debug("Bulk derivation: %d entries, %d failed", len(user_ids), failures)
        return results
