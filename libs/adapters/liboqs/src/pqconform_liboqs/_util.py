from __future__ import annotations
import logging
import os
from typing import Any, Callable, Dict, List, Optional, Sequence

log = logging.getLogger(__name__)


def try_import_oqs():
    try:
        import oqs  # type: ignore
        return oqs
    except Exception as exc:
        log.debug("oqs unavailable: %s", exc)
        return None


def candidate_order(env_var: str, candidates: Sequence[str]) -> List[str]:
    """Mechanism names to try: the ``env_var`` override, then ``candidates``."""
    override = os.getenv(env_var) if env_var else None
    head = [override] if override else []
    return head + [c for c in candidates if c != override]


def pick_mechanism(factory: Callable[[str], Any], env_var: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Return the first name ``factory`` can open, or None.

    liboqs builds differ in which mechanisms are enabled (and in their
    naming), so availability is probed by instantiation rather than by the
    helper lists oqs exposes.
    """
    for name in candidate_order(env_var, candidates):
        try:
            with factory(name):
                return name
        except Exception as exc:
            log.debug("mechanism %s unavailable: %s", name, exc)
    return None


def pick_kem_algorithm(oqs_mod, env_var: str, candidates: Sequence[str]) -> Optional[str]:
    return pick_mechanism(oqs_mod.KeyEncapsulation, env_var, candidates)


def pick_sig_algorithm(oqs_mod, env_var: str, candidates: Sequence[str]) -> Optional[str]:
    return pick_mechanism(oqs_mod.Signature, env_var, candidates)


def detail_length(details: Dict[str, Any], key: str) -> Optional[int]:
    """Read ``length_<key>`` from a mechanism's details, if it is a positive int."""
    val = details.get(f"length_{key}") if isinstance(details, dict) else None
    if isinstance(val, int) and val > 0:
        return val
    return None
