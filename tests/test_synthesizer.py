from __future__ import annotations

import hashlib
import re

import pytest

from consentkeys.pseudo import FakeAddress, LookupPools, ProfileSynthesizer, PseudonymEngine
from consentkeys.utils.errors import EmptyFieldError, MissingFieldError


def test_fake_email_shape(synth: ProfileSynthesizer, engine: PseudonymEngine) -> None:
    email = synth.generate_fake_email("user123", "app1")
    assert email == synth.generate_fake_email("user123", "app1")
    local, _, domain = email.partition("@")
    assert domain == "consentkeys.local"
    assert "ck_" + local == engine.derive("user123", "app1", "email")


def test_fake_email_custom_domain(engine: PseudonymEngine) -> None:
    synth = ProfileSynthesizer(engine, email_domain="example.org")
    assert synth.generate_fake_email("user123", "app1").endswith("@example.org")


def test_empty_email_domain_rejected(engine: PseudonymEngine) -> None:
    with pytest.raises(ValueError):
        ProfileSynthesizer(engine, email_domain="")


def test_fake_display_name(synth: ProfileSynthesizer) -> None:
    name = synth.generate_fake_display_name("user123", "app1")
    assert name == synth.generate_fake_display_name("user123", "app1")
    first, last = name.split(" ")
    assert first in synth.pools.first_names
    assert last in synth.pools.last_names


def test_display_name_uses_first_two_digest_bytes(
    synth: ProfileSynthesizer, engine: PseudonymEngine
) -> None:
    h = hashlib.sha256(engine.derive("user9", "app", "name").encode()).digest()
    pools = synth.pools
    expected = (
        f"{pools.first_names[h[0] % len(pools.first_names)]} "
        f"{pools.last_names[h[1] % len(pools.last_names)]}"
    )
    assert synth.generate_fake_display_name("user9", "app") == expected


def test_fake_address_fields(synth: ProfileSynthesizer) -> None:
    for i in range(300):
        addr = synth.generate_fake_address(f"user{i}", "app")
        number, _, street = addr.street.partition(" ")
        assert 1 <= int(number) <= 9999
        assert street in synth.pools.street_names
        assert addr.city in synth.pools.cities
        assert addr.state in synth.pools.states
        assert re.fullmatch(r"\d{5}", addr.zip)
        assert 10000 <= int(addr.zip) <= 99999


def test_fake_address_determinism(synth: ProfileSynthesizer) -> None:
    addr1 = synth.generate_fake_address("user123", "app1")
    addr2 = synth.generate_fake_address("user123", "app1")
    assert addr1 == addr2
    assert isinstance(addr1, FakeAddress)
    assert addr1.as_dict() == addr2.as_dict()
    assert set(addr1.as_dict()) == {"street", "city", "state", "zip"}


def test_cross_client_isolation(synth: ProfileSynthesizer) -> None:
    assert synth.generate_fake_email("user123", "shopping-app") != synth.generate_fake_email(
        "user123", "social-app"
    )
    assert synth.generate_fake_profile("user123", "shopping-app") != synth.generate_fake_profile(
        "user123", "social-app"
    )


def test_profile_fields_match_individual_generators(
    synth: ProfileSynthesizer, engine: PseudonymEngine
) -> None:
    profile = synth.generate_fake_profile("user7", "app")
    assert profile.id == engine.derive("user7", "app", "id")
    assert profile.email == synth.generate_fake_email("user7", "app")
    assert profile.display_name == synth.generate_fake_display_name("user7", "app")
    assert profile.address == synth.generate_fake_address("user7", "app")
    assert list(profile.as_dict()) == ["id", "email", "displayName", "address"]


def test_single_entry_pools(engine: PseudonymEngine) -> None:
    pools = LookupPools(["Pat"], ["Doe"], ["Elm St"], ["Springfield"], ["OR"])
    synth = ProfileSynthesizer(engine, pools)
    assert synth.generate_fake_display_name("u", "c") == "Pat Doe"
    addr = synth.generate_fake_address("u", "c")
    assert addr.street.endswith(" Elm St")
    assert (addr.city, addr.state) == ("Springfield", "OR")


@pytest.mark.parametrize(
    "method",
    [
        "generate_fake_email",
        "generate_fake_display_name",
        "generate_fake_address",
        "generate_fake_profile",
    ],
)
def test_validation_propagates(synth: ProfileSynthesizer, method: str) -> None:
    with pytest.raises(EmptyFieldError):
        getattr(synth, method)("", "app")
    with pytest.raises(MissingFieldError):
        getattr(synth, method)("user", None)
