from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from pqconform import (
    ConformanceSuite,
    ConformanceVerifier,
    KemRoundTripRunner,
    RandomKeyGenerator,
    SchemeRegistry,
    SignatureRoundTripRunner,
    UnknownScheme,
    default_registry,
    fingerprint as fingerprint_bytes,
    load_cases,
)
from pqconform.suite import export_json, summarize
from .config import Settings, configure_logging

app = typer.Typer(add_completion=False, help="Cryptographic scheme conformance harness")
log = logging.getLogger(__name__)

_REGISTRY: Optional[SchemeRegistry] = None


def build_registry(settings: Settings) -> SchemeRegistry:
    return default_registry(settings.adapters)


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


def _registry(ctx: typer.Context) -> SchemeRegistry:
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = build_registry(_settings(ctx))
    return _REGISTRY


def reset_registry() -> None:
    """Forget the cached registry so adapter/env changes take effect."""
    global _REGISTRY
    _REGISTRY = None


def _describe(outcome) -> str:
    if outcome.passed:
        return "PASS"
    if outcome.status == "mismatch":
        parts = [f"{m.field}: expected {m.expected}, got {m.actual}" for m in outcome.mismatches]
        return "MISMATCH " + "; ".join(parts)
    failure = getattr(outcome, "failure", None)
    if failure is not None:
        return f"FAIL {failure.error}: {failure.reason}"
    return f"FAIL {outcome.error}: {outcome.reason}"


@app.callback()
def main(ctx: typer.Context) -> None:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        typer.echo(f"configuration error: {exc}", err=True)
        raise typer.Exit(code=2)
    configure_logging(settings)
    ctx.obj = settings


@app.command("list-schemes")
def list_schemes(ctx: typer.Context) -> None:
    """List registered schemes and their capabilities."""
    for d in _registry(ctx).descriptors():
        seeded = "seeded" if d.supports_seeded_derivation else "random-only"
        typer.echo(f"- {d.name} [{d.kind}, {seeded}]")


@app.command()
def roundtrip(
    ctx: typer.Context,
    name: str,
    count: int = typer.Option(1, min=1, help="Number of independent round trips."),
) -> None:
    """Run KEM encapsulate/decapsulate (or sign/verify) round trips."""
    registry = _registry(ctx)
    try:
        descriptor = registry.resolve(name)
    except UnknownScheme as exc:
        typer.echo(f"[{name}] FAIL {exc.kind}: {exc.reason}", err=True)
        raise typer.Exit(code=1)
    generator = RandomKeyGenerator(registry)
    if descriptor.supports_kem:
        runner = KemRoundTripRunner(generator).round_trip
    else:
        runner = SignatureRoundTripRunner(generator).round_trip
    failures = 0
    for i in range(count):
        outcome = runner(descriptor)
        failures += 0 if outcome.passed else 1
        typer.echo(f"[{descriptor.kind}] {name} #{i + 1}: {_describe(outcome)}")
    if failures:
        raise typer.Exit(code=1)


@app.command()
def verify(
    ctx: typer.Context,
    name: str,
    seed: Optional[str] = typer.Option(None, help="Seed as hex; defaults to 00 01 02 ..."),
    expected_public: Optional[str] = typer.Option(None, help="Expected public key fingerprint."),
    expected_secret: Optional[str] = typer.Option(None, help="Expected secret key fingerprint."),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """Derive keys from a seed and compare their fingerprints."""
    seed_bytes = None
    if seed is not None:
        try:
            seed_bytes = bytes.fromhex(seed)
        except ValueError:
            raise typer.BadParameter("seed must be hex", param_hint="--seed")
    verifier = ConformanceVerifier(_registry(ctx))
    outcome = verifier.verify(name, seed_bytes, expected_public, expected_secret)
    if as_json:
        typer.echo(json.dumps(outcome.to_dict(), indent=2))
    else:
        if outcome.status != "failed":
            typer.echo(f"public key fingerprint: {outcome.public_fingerprint}")
            typer.echo(f"secret key fingerprint: {outcome.secret_fingerprint}")
        typer.echo(f"{name}: {_describe(outcome)}")
    if not outcome.passed:
        raise typer.Exit(code=1)


@app.command()
def fingerprint(data: str = typer.Argument(..., help="Bytes to fingerprint, as hex.")) -> None:
    """Print the 16-byte SHAKE-256 fingerprint of hex-encoded bytes."""
    try:
        raw = bytes.fromhex(data)
    except ValueError:
        raise typer.BadParameter("data must be hex", param_hint="DATA")
    typer.echo(str(fingerprint_bytes(raw)))


@app.command("run-suite")
def run_suite(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON case manifest."),
    jobs: Optional[int] = typer.Option(None, min=1, help="Worker threads (default PQCONFORM_JOBS)."),
    export: Optional[Path] = typer.Option(None, help="Write a JSON report here."),
) -> None:
    """Run every case in a manifest; failures are reported, not fatal."""
    try:
        cases = load_cases(manifest)
    except ValueError as exc:
        typer.echo(f"invalid manifest: {exc}", err=True)
        raise typer.Exit(code=2)
    suite = ConformanceSuite(_registry(ctx), jobs=jobs or _settings(ctx).jobs)
    results = suite.run(cases)
    for r in results:
        typer.echo(f"{r.case.name}: {_describe(r.outcome)}")
    summary = summarize(results)
    typer.echo(f"{summary['passed']}/{summary['total']} passed")
    if export is not None:
        path = export_json(results, export)
        typer.echo(f"Exported report to {path}")
    if summary["failed"]:
        raise typer.Exit(code=1)


def app_main():
    app()

if __name__ == "__main__":
    app_main()
