"""Classical (pre-quantum) providers backed by ``cryptography``.

Importing this package registers the providers into the pqconform catalog.
"""

# Trigger registration side-effects
from . import ec_adapters as _ec_adapters  # noqa: F401
from . import rsa_adapter as _rsa_adapter  # noqa: F401

__all__: list[str] = []
