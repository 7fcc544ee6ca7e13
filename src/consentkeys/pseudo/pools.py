"""Immutable lookup pools for synthesized profile fields.

The synthesizer turns hash bytes into indices into these pools.  Contents and
order are part of the output contract: reordering, adding or removing a single
entry changes the synthesized fields of every user.  Any change to the
built-in pools must therefore bump :data:`DEFAULT_POOLS_VERSION`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from consentkeys.config.schema import PoolSettings

__all__ = ["DEFAULT_POOLS", "DEFAULT_POOLS_VERSION", "LookupPools"]

DEFAULT_POOLS_VERSION = "1"


# -- Built-in corpora --------------------------------------------------------

_FIRST_NAMES = """
Alex Taylor Jordan Casey Morgan Riley Avery Quinn
Blake Cameron Drew Emery Finley Harley Jamie Kai
Logan Marley Nico Parker Reese Sage Skyler Tatum
""".split()

_LAST_NAMES = """
Johnson Williams Brown Jones Garcia Miller Davis Rodriguez
Martinez Hernandez Lopez Gonzalez Wilson Anderson Thomas
Taylor Moore Jackson Martin Lee Perez Thompson White Harris
""".split()

# Multi-word entries, so one per element rather than a whitespace split.
_STREET_NAMES = [
    "Main St", "Oak Ave", "Pine Rd", "Elm Dr", "Maple Ln", "Cedar Blvd", "Park Ave",
    "First St", "Second Ave", "Third Dr", "Fourth Ln", "Fifth St", "Sixth Ave",
    "Washington St", "Lincoln Ave", "Jefferson Dr", "Madison Ln", "Monroe St",
]  # fmt: skip

_CITIES = """
Franklin Georgetown Springfield Riverside Madison Greenville
Bristol Fairview Arlington Salem Richmond Troy Auburn
Clayton Hudson Newport Lexington Ashland Beverly Camden
""".split()

_STATES = """
NY CA TX FL PA IL OH GA NC MI NJ VA
WA AZ MA TN IN MO MD WI CO MN SC AL
""".split()


# -- Pools value ---------------------------------------------------------------


@dataclass(frozen=True)
class LookupPools:
    """Ordered, non-empty entry tuples for each synthesized category."""

    first_names: tuple[str, ...]
    last_names: tuple[str, ...]
    street_names: tuple[str, ...]
    cities: tuple[str, ...]
    states: tuple[str, ...]
    version: str = field(default="custom")

    def __post_init__(self) -> None:
        for name in ("first_names", "last_names", "street_names", "cities", "states"):
            entries: Sequence[str] = getattr(self, name)
            if isinstance(entries, str):
                raise TypeError(f"{name} must be a sequence of strings, not a string")
            frozen = tuple(entries)
            if not frozen:
                raise ValueError(f"{name} pool must not be empty")
            if not all(isinstance(e, str) and e for e in frozen):
                raise ValueError(f"{name} pool entries must be non-empty strings")
            object.__setattr__(self, name, frozen)

    @classmethod
    def from_settings(cls, settings: PoolSettings | None) -> LookupPools:
        """Return pools with configured categories replacing the defaults."""

        if settings is None:
            return DEFAULT_POOLS
        overrides = {
            name: getattr(settings, name)
            for name in ("first_names", "last_names", "street_names", "cities", "states")
            if getattr(settings, name) is not None
        }
        if not overrides:
            return DEFAULT_POOLS
        base = {
            "first_names": DEFAULT_POOLS.first_names,
            "last_names": DEFAULT_POOLS.last_names,
            "street_names": DEFAULT_POOLS.street_names,
            "cities": DEFAULT_POOLS.cities,
            "states": DEFAULT_POOLS.states,
        }
        base.update(overrides)
        return cls(**base, version=settings.version)


DEFAULT_POOLS = LookupPools(
    first_names=tuple(_FIRST_NAMES),
    last_names=tuple(_LAST_NAMES),
    street_names=tuple(_STREET_NAMES),
    cities=tuple(_CITIES),
    states=tuple(_STATES),
    version=DEFAULT_POOLS_VERSION,
)
