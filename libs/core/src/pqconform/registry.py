"""Provider catalog and the read-only scheme registry.

Adapter modules register provider *classes* into :data:`catalog` as an
import side effect. A :class:`SchemeRegistry` is then built once from
provider *instances* and injected into the components that need it; after
construction it is never mutated, so any number of threads may resolve
through it without locking.
"""
from __future__ import annotations

import importlib
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import KeyPairingError, UnknownScheme
from .types import SchemeDescriptor

log = logging.getLogger(__name__)

DEFAULT_ADAPTERS: Tuple[str, ...] = ("pqconform_classic", "pqconform_fips", "pqconform_liboqs")


class ProviderCatalog:
    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def register(self, name: str) -> Callable[[Any], Any]:
        def _inner(cls_or_obj: Any) -> Any:
            if name in self._items and self._items[name] is not cls_or_obj:
                raise ValueError(f"provider {name!r} is already registered")
            self._items[name] = cls_or_obj
            return cls_or_obj
        return _inner

    def get(self, name: str) -> Any:
        return self._items[name]

    def list(self) -> Dict[str, Any]:
        return dict(self._items)


catalog = ProviderCatalog()


class SchemeRegistry:
    """Immutable name -> (descriptor, provider) lookup table."""

    def __init__(self, providers: Mapping[str, Any]) -> None:
        entries: Dict[str, Tuple[SchemeDescriptor, Any]] = {}
        for name, provider in providers.items():
            descriptor = getattr(provider, "descriptor", None)
            if not isinstance(descriptor, SchemeDescriptor):
                raise ValueError(f"provider for {name!r} does not declare a SchemeDescriptor")
            if descriptor.name != name:
                raise ValueError(
                    f"provider registered as {name!r} describes itself as {descriptor.name!r}"
                )
            entries[name] = (descriptor, provider)
        self._entries = MappingProxyType(entries)

    @classmethod
    def from_providers(cls, providers: Iterable[Any]) -> "SchemeRegistry":
        return cls({p.descriptor.name: p for p in providers})

    @classmethod
    def from_catalog(cls, source: Optional[ProviderCatalog] = None) -> "SchemeRegistry":
        """Instantiate every catalogued provider, skipping those that fail.

        Constructors raise when the backing library lacks the mechanism (for
        example a liboqs build without HQC); that scheme is then simply absent.
        """
        source = source if source is not None else catalog
        providers: Dict[str, Any] = {}
        for name, factory in source.list().items():
            try:
                provider = factory() if isinstance(factory, type) else factory
            except Exception as exc:
                log.warning("skipping provider %s: %s", name, exc)
                continue
            providers[name] = provider
        return cls(providers)

    def resolve(self, name: str) -> SchemeDescriptor:
        try:
            return self._entries[name][0]
        except KeyError:
            raise UnknownScheme(name) from None

    def provider(self, descriptor: SchemeDescriptor) -> Any:
        entry = self._entries.get(descriptor.name)
        if entry is None:
            raise UnknownScheme(descriptor.name)
        if entry[0] is not descriptor:
            raise KeyPairingError(
                f"descriptor for {descriptor.name!r} was not issued by this registry"
            )
        return entry[1]

    def names(self) -> List[str]:
        return sorted(self._entries)

    def descriptors(self) -> List[SchemeDescriptor]:
        return [self._entries[n][0] for n in self.names()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def load_adapters(modules: Sequence[str] = DEFAULT_ADAPTERS) -> List[str]:
    """Import adapter packages so they register their providers.

    Returns the modules that imported cleanly; failures are logged and skipped.
    """
    loaded: List[str] = []
    for mod in modules:
        try:
            importlib.import_module(mod)
        except Exception as exc:
            log.warning("adapter %s unavailable: %s", mod, exc)
            continue
        loaded.append(mod)
    return loaded


def default_registry(modules: Sequence[str] = DEFAULT_ADAPTERS) -> SchemeRegistry:
    load_adapters(modules)
    return SchemeRegistry.from_catalog(catalog)
