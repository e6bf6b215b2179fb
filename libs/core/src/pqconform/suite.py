"""Batch conformance runs over many schemes.

Each case is independent; a case that fails (including an unknown scheme
name) is reported and the batch carries on. Cases may run on worker threads
since the only shared state is the read-only registry.
"""
from __future__ import annotations

import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .errors import UnknownScheme
from .kem import KemRoundTripRunner
from .keys import RandomKeyGenerator
from .outcomes import Failure, Outcome, RoundTripOutcome, SignatureOutcome
from .registry import SchemeRegistry
from .signature import DEFAULT_MESSAGE, SignatureRoundTripRunner
from .verifier import ConformanceVerifier

log = logging.getLogger(__name__)

KEM_ROUNDTRIP = "kem-roundtrip"
SIG_ROUNDTRIP = "sig-roundtrip"
CONFORMANCE = "conformance"
CASE_KINDS = (KEM_ROUNDTRIP, SIG_ROUNDTRIP, CONFORMANCE)


@dataclass(frozen=True)
class SuiteCase:
    kind: str
    scheme: str
    seed: Optional[bytes] = None
    expected_public: Optional[str] = None
    expected_secret: Optional[str] = None
    message: bytes = DEFAULT_MESSAGE
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in CASE_KINDS:
            raise ValueError(f"unknown case kind {self.kind!r}; expected one of {CASE_KINDS}")

    @property
    def name(self) -> str:
        return self.label or f"{self.kind}:{self.scheme}"


@dataclass(frozen=True)
class SuiteResult:
    case: SuiteCase
    outcome: Outcome
    duration_ms: float

    @property
    def passed(self) -> bool:
        return bool(self.outcome.passed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "case": self.case.name,
            "kind": self.case.kind,
            "duration_ms": round(self.duration_ms, 3),
            "outcome": self.outcome.to_dict(),
        }


class ConformanceSuite:
    def __init__(self, registry: SchemeRegistry, jobs: int = 1) -> None:
        if jobs < 1:
            raise ValueError("jobs must be >= 1")
        self._registry = registry
        self._jobs = jobs
        generator = RandomKeyGenerator(registry)
        self._kem = KemRoundTripRunner(generator)
        self._sig = SignatureRoundTripRunner(generator)
        self._verifier = ConformanceVerifier(registry)

    def run(self, cases: Iterable[SuiteCase]) -> List[SuiteResult]:
        items = list(cases)
        if self._jobs == 1 or len(items) <= 1:
            return [self.run_case(c) for c in items]
        with ThreadPoolExecutor(max_workers=self._jobs) as pool:
            return list(pool.map(self.run_case, items))

    def run_case(self, case: SuiteCase) -> SuiteResult:
        t0 = time.perf_counter()
        outcome = self._dispatch(case)
        elapsed = (time.perf_counter() - t0) * 1000.0
        log.debug("%s -> %s (%.2f ms)", case.name, outcome.status, elapsed)
        return SuiteResult(case=case, outcome=outcome, duration_ms=elapsed)

    def _dispatch(self, case: SuiteCase) -> Outcome:
        if case.kind == CONFORMANCE:
            return self._verifier.verify(
                case.scheme, case.seed, case.expected_public, case.expected_secret
            )
        try:
            descriptor = self._registry.resolve(case.scheme)
        except UnknownScheme as exc:
            if case.kind == KEM_ROUNDTRIP:
                return RoundTripOutcome(scheme=case.scheme, passed=False, failure=Failure.from_error(exc))
            return SignatureOutcome(scheme=case.scheme, passed=False, failure=Failure.from_error(exc))
        if case.kind == KEM_ROUNDTRIP:
            return self._kem.round_trip(descriptor)
        return self._sig.round_trip(descriptor, case.message)


def summarize(results: Sequence[SuiteResult]) -> Dict[str, int]:
    passed = sum(1 for r in results if r.passed)
    return {"total": len(results), "passed": passed, "failed": len(results) - passed}


def export_json(results: Sequence[SuiteResult], path: Union[str, Path]) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "summary": summarize(results),
        "results": [r.to_dict() for r in results],
    }
    out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return out


def _hex_field(entry: Dict[str, Any], key: str, index: int) -> Optional[bytes]:
    value = entry.get(key)
    if value is None:
        return None
    try:
        return bytes.fromhex(str(value))
    except ValueError:
        raise ValueError(f"case #{index}: {key} is not valid hex") from None


def parse_cases(data: Any) -> List[SuiteCase]:
    if not isinstance(data, dict):
        raise ValueError("manifest must be a JSON object with a 'cases' list")
    raw = data.get("cases")
    if not isinstance(raw, list):
        raise ValueError("manifest needs a 'cases' list")
    cases: List[SuiteCase] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict) or "scheme" not in entry:
            raise ValueError(f"case #{index}: expected an object with a 'scheme'")
        message = entry.get("message")
        try:
            cases.append(
                SuiteCase(
                    kind=entry.get("kind", CONFORMANCE),
                    scheme=str(entry["scheme"]),
                    seed=_hex_field(entry, "seed", index),
                    expected_public=entry.get("expected_public"),
                    expected_secret=entry.get("expected_secret"),
                    message=message.encode("utf-8") if isinstance(message, str) else DEFAULT_MESSAGE,
                    label=entry.get("label"),
                )
            )
        except ValueError as exc:
            if str(exc).startswith("case #"):
                raise
            raise ValueError(f"case #{index}: {exc}") from None
    return cases


def load_cases(path: Union[str, Path]) -> List[SuiteCase]:
    """Read a JSON manifest of the form ``{"cases": [{"kind": ..., "scheme": ...}]}``."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_cases(json.loads(text))
