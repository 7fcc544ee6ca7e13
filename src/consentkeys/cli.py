"""Typer-based command line interface for the pseudonym engine.

Every command reads configuration (package defaults, optional ``--config``
YAML, then the ``CONSENTKEYS_SECRET_KEY`` environment variable), builds the
engine and prints its result to stdout.  Structured results (addresses,
profiles, bulk maps, engine info, benchmarks) are printed as JSON.

Exit codes
----------
0 success
1 ``verify`` rejected the candidate
4 configuration error (unreadable/invalid YAML, missing or weak secret key)
5 derivation error (missing or empty identifier)
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .evaluation import perf
from .pseudo import BulkError, ProfileSynthesizer, PseudonymEngine, verify_pseudonym
from .utils.errors import InvalidKeyError, PseudonymError
from .utils.logging import configure_logging, get_logger

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="consentkeys",
    help="Derive deterministic pseudonyms and fake profile fields. "
    "The secret key is read from CONSENTKEYS_SECRET_KEY unless set in --config.",
)

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@dataclass
class _State:
    cfg: ConfigModel


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _state(ctx: typer.Context) -> _State:
    state = ctx.obj
    if not isinstance(state, _State):  # pragma: no cover - callback always runs
        _safe_exit(4, "Configuration not loaded")
    return state


def _engine(ctx: typer.Context) -> PseudonymEngine:
    try:
        return PseudonymEngine.from_config(_state(ctx).cfg)
    except InvalidKeyError as exc:
        _safe_exit(4, str(exc))


def _synthesizer(ctx: typer.Context) -> ProfileSynthesizer:
    cfg = _state(ctx).cfg
    try:
        return ProfileSynthesizer.from_config(cfg, _engine(ctx))
    except (TypeError, ValueError) as exc:
        _safe_exit(4, str(exc))


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _read_ids(path: Path) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        _safe_exit(4, str(exc))
    return text.splitlines()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit debug messages to stderr"
    ),
) -> None:
    """Entry point for the consentkeys command group."""

    try:
        cfg = load_config(config_path)
    except (ValidationError, yaml.YAMLError, OSError, ValueError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    configure_logging("DEBUG" if verbose else cfg.logging.level)
    log.debug("Loaded config (schema_version=%d)", cfg.schema_version)
    ctx.obj = _State(cfg=cfg)


@app.command()
def derive(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="User identifier"),  # noqa: B008
    client_id: str = typer.Argument(..., help="Client/app identifier"),  # noqa: B008
    data_type: Optional[str] = typer.Option(  # noqa: B008
        None, "--data-type", "-t", help="Pseudonym context; defaults to engine.default_data_type"
    ),
) -> None:
    """Print the pseudonym for USER_ID in CLIENT_ID."""

    engine = _engine(ctx)
    kind = data_type if data_type is not None else _state(ctx).cfg.engine.default_data_type
    try:
        typer.echo(engine.derive(user_id, client_id, kind))
    except PseudonymError as exc:
        _safe_exit(5, str(exc))


@app.command()
def verify(
    candidate: str = typer.Argument(..., help="String to check"),  # noqa: B008
) -> None:
    """Check that CANDIDATE is formatted like a pseudonym (format only)."""

    if verify_pseudonym(candidate):
        typer.echo("valid")
        return
    typer.echo("invalid")
    raise typer.Exit(1)


@app.command()
def email(
    ctx: typer.Context,
    user_id: str = typer.Argument(...),  # noqa: B008
    client_id: str = typer.Argument(...),  # noqa: B008
) -> None:
    """Print the fake email address for USER_ID in CLIENT_ID."""

    synth = _synthesizer(ctx)
    try:
        typer.echo(synth.generate_fake_email(user_id, client_id))
    except PseudonymError as exc:
        _safe_exit(5, str(exc))


@app.command()
def name(
    ctx: typer.Context,
    user_id: str = typer.Argument(...),  # noqa: B008
    client_id: str = typer.Argument(...),  # noqa: B008
) -> None:
    """Print the fake display name for USER_ID in CLIENT_ID."""

    synth = _synthesizer(ctx)
    try:
        typer.echo(synth.generate_fake_display_name(user_id, client_id))
    except PseudonymError as exc:
        _safe_exit(5, str(exc))


@app.command()
def address(
    ctx: typer.Context,
    user_id: str = typer.Argument(...),  # noqa: B008
    client_id: str = typer.Argument(...),  # noqa: B008
) -> None:
    """Print the fake address for USER_ID in CLIENT_ID as JSON."""

    synth = _synthesizer(ctx)
    try:
        _echo_json(synth.generate_fake_address(user_id, client_id).as_dict())
    except PseudonymError as exc:
        _safe_exit(5, str(exc))


@app.command()
def profile(
    ctx: typer.Context,
    user_id: str = typer.Argument(...),  # noqa: B008
    client_id: str = typer.Argument(...),  # noqa: B008
) -> None:
    """Print the full fake profile for USER_ID in CLIENT_ID as JSON."""

    synth = _synthesizer(ctx)
    try:
        _echo_json(synth.generate_fake_profile(user_id, client_id).as_dict())
    except PseudonymError as exc:
        _safe_exit(5, str(exc))


@app.command()
def bulk(
    ctx: typer.Context,
    client_id: str = typer.Argument(..., help="Client/app identifier"),  # noqa: B008
    user_ids: Optional[List[str]] = typer.Argument(  # noqa: B008
        None, help="User identifiers"
    ),
    in_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--in", "--input", help="File with one user identifier per line"
    ),
    data_type: Optional[str] = typer.Option(  # noqa: B008
        None, "--data-type", "-t", help="Pseudonym context; defaults to engine.default_data_type"
    ),
) -> None:
    """Print a JSON map of user id to pseudonym; failed entries carry an error."""

    ids = list(user_ids or [])
    if in_path is not None:
        ids.extend(_read_ids(in_path))
    synth = _synthesizer(ctx)
    kind = data_type if data_type is not None else _state(ctx).cfg.engine.default_data_type
    results = synth.generate_bulk_pseudonyms(ids, client_id, kind)
    _echo_json(
        {
            key: value.as_dict() if isinstance(value, BulkError) else value
            for key, value in results.items()
        }
    )


@app.command()
def info(ctx: typer.Context) -> None:
    """Print the engine configuration (never the key) as JSON."""

    _echo_json(_engine(ctx).info())


@app.command()
def bench(
    ctx: typer.Context,
    iterations: int = typer.Option(10_000, min=1, help="Derivations to time"),  # noqa: B008
    clients: int = typer.Option(100, min=1, help="Distinct client ids to cycle"),  # noqa: B008
) -> None:
    """Time derivations and count collisions over a synthetic population."""

    engine = _engine(ctx)
    _echo_json(
        {
            "timing": perf.profile_derivations(engine, iterations, clients),
            "collisions": perf.collision_census(engine, iterations, clients),
        }
    )
