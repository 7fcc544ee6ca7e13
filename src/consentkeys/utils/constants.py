"""Wire-format constants shared by the derivation engine and its consumers.

Changing any value here changes every pseudonym produced for every user.
"""

from __future__ import annotations

import re
from typing import Final

__all__ = [
    "PREFIX",
    "FRAGMENT_LENGTH",
    "MIN_KEY_LENGTH",
    "ALGORITHM",
    "DEFAULT_DATA_TYPE",
    "DEFAULT_EMAIL_DOMAIN",
    "SEP_USER",
    "SEP_CLIENT",
    "SEP_DATA_TYPE",
    "PSEUDONYM_RE",
]

PREFIX: Final = "ck_"
FRAGMENT_LENGTH: Final = 16
MIN_KEY_LENGTH: Final = 32
ALGORITHM: Final = "HMAC-SHA256"

DEFAULT_DATA_TYPE: Final = "default"
DEFAULT_EMAIL_DOMAIN: Final = "consentkeys.local"

# Terminators appended after user id, client id and data type respectively.
SEP_USER: Final = "\x00"
SEP_CLIENT: Final = "\x01"
SEP_DATA_TYPE: Final = "\x02"

PSEUDONYM_RE: Final = re.compile(rf"{re.escape(PREFIX)}[A-Za-z0-9_-]{{{FRAGMENT_LENGTH}}}")
