"""Pseudonym derivation and fake profile synthesis."""

from .engine import EngineInfo, PseudonymEngine, verify_pseudonym
from .pools import DEFAULT_POOLS, DEFAULT_POOLS_VERSION, LookupPools
from .synthesizer import BulkError, FakeAddress, FakeProfile, ProfileSynthesizer

__all__ = [
    "BulkError",
    "DEFAULT_POOLS",
    "DEFAULT_POOLS_VERSION",
    "EngineInfo",
    "FakeAddress",
    "FakeProfile",
    "LookupPools",
    "ProfileSynthesizer",
    "PseudonymEngine",
    "verify_pseudonym",
]
