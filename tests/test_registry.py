from __future__ import annotations

import dataclasses

import pytest

from conftest import DemoKEM768
from pqconform import KeyPairingError, SchemeRegistry, UnknownScheme
from pqconform.registry import ProviderCatalog


def test_resolve_returns_registered_descriptor(demo_registry):
    descriptor = demo_registry.resolve("DemoKEM768")
    assert descriptor.name == "DemoKEM768"
    assert descriptor.supports_kem
    assert descriptor.sizes.seed == 32
    assert descriptor.sizes.ciphertext == 1088
    assert descriptor.sizes.shared_secret == 32


def test_resolve_unknown_scheme_raises_without_side_effects(demo_registry):
    before = demo_registry.names()
    with pytest.raises(UnknownScheme) as info:
        demo_registry.resolve("NoSuchScheme")
    assert info.value.name == "NoSuchScheme"
    assert demo_registry.names() == before
    assert "NoSuchScheme" not in demo_registry


def test_descriptors_are_immutable(demo_registry):
    descriptor = demo_registry.resolve("DemoKEM768")
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.name = "other"  # type: ignore[misc]


def test_registry_table_cannot_be_mutated(demo_registry):
    with pytest.raises(TypeError):
        demo_registry._entries["evil"] = None  # type: ignore[index]


def test_provider_rejects_foreign_descriptor(demo_registry):
    foreign = dataclasses.replace(demo_registry.resolve("DemoKEM768"))
    with pytest.raises(KeyPairingError):
        demo_registry.provider(foreign)


def test_registration_key_must_match_descriptor_name():
    with pytest.raises(ValueError):
        SchemeRegistry({"wrong-name": DemoKEM768()})


def test_catalog_rejects_duplicate_names():
    cat = ProviderCatalog()
    cat.register("a")(DemoKEM768)

    class Other:
        pass

    with pytest.raises(ValueError):
        cat.register("a")(Other)


def test_from_catalog_skips_providers_that_fail_to_construct():
    cat = ProviderCatalog()
    cat.register("DemoKEM768")(DemoKEM768)

    @cat.register("broken")
    class Broken:
        def __init__(self) -> None:
            raise RuntimeError("mechanism not enabled")

    registry = SchemeRegistry.from_catalog(cat)
    assert registry.names() == ["DemoKEM768"]
    assert len(registry) == 1


def test_default_catalog_contains_classic_and_fips_providers():
    from pqconform import default_registry

    registry = default_registry(("pqconform_classic", "pqconform_fips"))
    for name in (
        "rsa-oaep", "rsa-pss", "x25519-dhkem", "p256-dhkem", "ed25519",
        "ml-kem-512", "ml-kem-768", "ml-kem-1024", "ml-dsa-44", "ml-dsa-65", "ml-dsa-87",
    ):
        assert name in registry
