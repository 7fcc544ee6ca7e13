"""Deterministic, keyed pseudonyms and synthetic profile fields.

A :class:`~consentkeys.pseudo.PseudonymEngine` maps a user id, a client id and
a data type to a stable identifier such as ``ck_LXG3lkaA_4kKGJzy``.  The same
user receives unrelated identifiers in different clients, and identifiers
cannot be reversed without the engine's secret key.
:class:`~consentkeys.pseudo.ProfileSynthesizer` builds fake emails, display
names and postal addresses on top of those identifiers.

The command line interface lives in :mod:`consentkeys.cli`.
"""

__version__ = "1.0.0"

from .pseudo import (  # noqa: E402
    BulkError,
    FakeAddress,
    FakeProfile,
    LookupPools,
    ProfileSynthesizer,
    PseudonymEngine,
    verify_pseudonym,
)
from .utils.errors import (  # noqa: E402
    EmptyFieldError,
    InvalidBulkInputError,
    InvalidKeyError,
    MissingFieldError,
    PseudonymError,
)

__all__ = [
    "__version__",
    "BulkError",
    "EmptyFieldError",
    "FakeAddress",
    "FakeProfile",
    "InvalidBulkInputError",
    "InvalidKeyError",
    "LookupPools",
    "MissingFieldError",
    "ProfileSynthesizer",
    "PseudonymEngine",
    "PseudonymError",
    "verify_pseudonym",
]
