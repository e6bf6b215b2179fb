"""Adapter package for liboqs-backed algorithms.

Importing submodules registers the providers when liboqs-python is
importable; otherwise nothing is registered and those schemes are absent.
"""

# Trigger registration side-effects
from . import kem_adapters as _kem_adapters  # noqa: F401
from . import sig_adapters as _sig_adapters  # noqa: F401

__all__: list[str] = []
