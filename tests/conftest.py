from __future__ import annotations

import pytest

from consentkeys.pseudo import ProfileSynthesizer, PseudonymEngine

REFERENCE_KEY = "super-secret-key-at-least-32-chars-long"


@pytest.fixture
def engine() -> PseudonymEngine:
    return PseudonymEngine(REFERENCE_KEY)


@pytest.fixture
def synth(engine: PseudonymEngine) -> ProfileSynthesizer:
    return ProfileSynthesizer(engine)


@pytest.fixture(autouse=True)
def _no_ambient_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CONSENTKEYS_SECRET_KEY", raising=False)
