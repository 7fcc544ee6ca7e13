"""Outputs fixed by the 1.0.0 release.

A failure here means previously issued pseudonyms or fake profiles would
change for existing users.
"""

from __future__ import annotations

import pytest

from consentkeys.pseudo import ProfileSynthesizer, PseudonymEngine


@pytest.mark.parametrize(
    ("user_id", "client_id", "data_type", "expected"),
    [
        ("user123", "shopping-app", "default", "ck_LXG3lkaA_4kKGJzy"),
        ("user123", "shopping-app", "id", "ck_MKwV7Tuqz6gjaw-8"),
        ("user123", "shopping-app", "email", "ck_2AIwdRukVbxJin80"),
        ("user123", "shopping-app", "name", "ck_QvcejWG9MvgePGwW"),
        ("user123", "shopping-app", "address", "ck__b0nLCYtQq-0vQjU"),
        ("user123", "social-app", "default", "ck_vdDMbUWL_Es10hrf"),
        ("user456", "shopping-app", "default", "ck_dXNWfDQFa1rlxn05"),
        ("user12", "3shopping-app", "default", "ck_rjE32v_jvLQc4KoV"),
        ("用户123", "app-🚀", "default", "ck_eAwkUxBGto3YbnfI"),
        ("a", "app", "default", "ck_UBm0xS5xUgNpIifX"),
        ("b", "app", "default", "ck_0ogfI0Y1YkeDlMph"),
    ],
)
def test_derive_vectors(
    engine: PseudonymEngine, user_id: str, client_id: str, data_type: str, expected: str
) -> None:
    assert engine.derive(user_id, client_id, data_type) == expected


def test_other_key_vectors() -> None:
    engine = PseudonymEngine("second-secret-key-at-least-32-chars-long")
    assert engine.derive("user123", "app") == "ck_TvhVsCpRRXiF72D_"


def test_profile_vector(synth: ProfileSynthesizer) -> None:
    assert synth.generate_fake_profile("user123", "shopping-app").as_dict() == {
        "id": "ck_MKwV7Tuqz6gjaw-8",
        "email": "2AIwdRukVbxJin80@consentkeys.local",
        "displayName": "Riley Davis",
        "address": {
            "street": "230 Lincoln Ave",
            "city": "Troy",
            "state": "PA",
            "zip": "35333",
        },
    }


def test_profile_vector_other_client(synth: ProfileSynthesizer) -> None:
    assert synth.generate_fake_profile("user123", "social-app").as_dict() == {
        "id": "ck_sTeIed1W3dvwnZ5e",
        "email": "mHTkQR5QvmQxvSj7@consentkeys.local",
        "displayName": "Quinn Miller",
        "address": {
            "street": "142 Monroe St",
            "city": "Richmond",
            "state": "TN",
            "zip": "38233",
        },
    }
