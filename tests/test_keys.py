from __future__ import annotations

import pytest

from conftest import DemoKEM768
from pqconform import (
    DeterministicDeriver,
    EntropyUnavailable,
    InvalidSeedLength,
    KeyPair,
    KeyPairingError,
    PrivateKey,
    ProviderFailure,
    PublicKey,
    RandomKeyGenerator,
    SchemeDescriptor,
    SchemeRegistry,
    UnsupportedCapability,
    canonical_seed,
)


def test_derive_is_deterministic(demo_registry, demo_kem):
    deriver = DeterministicDeriver(demo_registry)
    descriptor = demo_registry.resolve("DemoKEM768")
    seed = canonical_seed(32)
    first = deriver.derive(descriptor, seed)
    second = deriver.derive(descriptor, seed)
    assert demo_kem.marshal(first.public.handle) == demo_kem.marshal(second.public.handle)
    assert demo_kem.marshal(first.private.handle) == demo_kem.marshal(second.private.handle)
    assert first.descriptor is descriptor


@pytest.mark.parametrize("length", [0, 31, 33, 64])
def test_derive_rejects_wrong_seed_length(demo_registry, length):
    deriver = DeterministicDeriver(demo_registry)
    descriptor = demo_registry.resolve("DemoKEM768")
    with pytest.raises(InvalidSeedLength) as info:
        deriver.derive(descriptor, bytes(length))
    assert info.value.expected == 32
    assert info.value.actual == length


def test_derive_requires_seeded_capability():
    class RandomOnly(DemoKEM768):
        pass

    provider = RandomOnly()
    provider.descriptor = SchemeDescriptor(
        name="DemoKEM768", supports_kem=True, sizes=DemoKEM768.descriptor.sizes
    )
    registry = SchemeRegistry.from_providers([provider])
    with pytest.raises(UnsupportedCapability):
        DeterministicDeriver(registry).derive(registry.resolve("DemoKEM768"), bytes(32))


def test_derive_wraps_provider_errors():
    class Exploding(DemoKEM768):
        def derive_keypair(self, seed):
            raise ValueError("bad seed for curve")

    registry = SchemeRegistry.from_providers([Exploding()])
    with pytest.raises(ProviderFailure) as info:
        DeterministicDeriver(registry).derive(registry.resolve("DemoKEM768"), bytes(32))
    assert info.value.stage == "derive"


def test_generate_produces_fresh_pairs(generator, demo_registry):
    descriptor = demo_registry.resolve("DemoKEM768")
    a = generator.generate(descriptor)
    b = generator.generate(descriptor)
    assert a.public.handle != b.public.handle


def test_entropy_failure_surfaces_without_retry():
    class NoEntropy(DemoKEM768):
        calls = 0

        def keygen(self):
            NoEntropy.calls += 1
            raise OSError("getrandom failed")

    registry = SchemeRegistry.from_providers([NoEntropy()])
    with pytest.raises(EntropyUnavailable):
        RandomKeyGenerator(registry).generate(registry.resolve("DemoKEM768"))
    assert NoEntropy.calls == 1


def test_provider_raised_entropy_error_passes_through():
    class Exhausted(DemoKEM768):
        def keygen(self):
            raise EntropyUnavailable("pool exhausted", scheme="DemoKEM768")

    registry = SchemeRegistry.from_providers([Exhausted()])
    with pytest.raises(EntropyUnavailable) as info:
        RandomKeyGenerator(registry).generate(registry.resolve("DemoKEM768"))
    assert info.value.reason == "pool exhausted"


def test_keypair_rejects_mixed_schemes(demo_registry):
    kem = demo_registry.resolve("DemoKEM768")
    sig = demo_registry.resolve("DemoSig")
    with pytest.raises(KeyPairingError):
        KeyPair(PublicKey(kem, b"pk"), PrivateKey(sig, b"sk"))


def test_key_repr_hides_handles(demo_registry):
    kem = demo_registry.resolve("DemoKEM768")
    assert "secret-bytes" not in repr(PrivateKey(kem, b"secret-bytes"))
