# ruff: noqa: I001
"""CLI for the ``bachatbox`` package.

A Typer console interface over the import services. Environment variables
(``BACHATBOX_DATABASE_URL``, ``BACHATBOX_LOG_LEVEL``,
``BACHATBOX_IMPORT_BATCH_SIZE``) are loaded from a local ``.env`` with
``python-dotenv`` before any command runs. Business logic lives in
``bachatbox.api`` and ``bachatbox.ingest``.

Commands
--------
- ``import-file --file-path PATH [--provider ID] [--persist]``: normalize a
  CSV/Excel file and print one tab-separated line per record; with
  ``--persist`` the records are written to the database.
- ``detect-columns --file-path PATH``: show which header plays which role.
- ``providers``: list the supported payment-provider export layouts.
- ``init-db``: apply the Alembic migrations to the configured database.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated, Protocol

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .errors import DecodeError
from .logging_setup import configure_logging, level_for_verbosity


class _Printable(Protocol):
    amount: object
    transaction_type: str
    description: str
    category: str | None
    date: datetime


# ---- Small module-level helpers used by CLI commands -------------------------


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _read_file(file_path: Path) -> tuple[bytes, str]:
    """Read ``file_path`` and derive its decoder kind from the extension."""

    from .ingest.decoder import file_kind_for

    kind = file_kind_for(file_path)
    try:
        return file_path.read_bytes(), kind
    except FileNotFoundError:
        raise _fail(f"File not found: {file_path}") from None
    except PermissionError:
        raise _fail(f"Permission denied: {file_path}") from None


def _emit(rows: list[_Printable]) -> None:
    for r in rows:
        typer.echo(
            f"{r.date.date().isoformat()}\t{r.transaction_type}\t{r.amount}\t"
            f"{r.category or ''}\t{r.description}"
        )


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Import CSV/Excel transaction exports (bank statements, Google Pay, Paytm, "
        "PhonePe, Amazon Pay) into BachatBox."
    ),
)

# Shared by every command that reads a statement file.
FILE_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--file-path",
    help="Path to a .csv, .xlsx or .xls file",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
    readable=True,
)


@app.command("import-file")
def import_file_cmd(
    file_path: Annotated[Path, FILE_PATH_OPTION],
    *,
    provider: str | None = typer.Option(
        None,
        help="Payment provider export layout (google_pay, paytm, phonepe, amazon_pay, "
        "bank_statement, other). Imports into the wallet when set.",
    ),
    persist: bool = typer.Option(False, help="Write the imported records to the database."),
    database_url: str | None = typer.Option(
        None, help="Override BACHATBOX_DATABASE_URL/DATABASE_URL."
    ),
    username: str = typer.Option("demouser", help="Owner of the imported records."),
    email: str | None = typer.Option(
        None, help="Email used when the user does not exist yet (default <username>@localhost)."
    ),
) -> None:
    """Normalize a file and print (optionally persist) its transactions."""

    from .api import preview_file, store_transactions, store_wallet_transactions

    now = datetime.now(UTC)
    provider = provider or None
    try:
        content, kind = _read_file(file_path)
        batch = preview_file(content, kind, provider, now=now)
    except DecodeError as e:
        raise _fail(f"Failed to read {file_path}: {e}") from e

    rows: list[_Printable] = list(batch.records)
    if persist:
        try:
            from db.client import session_scope
            from .persistence import SqlStore

            with session_scope(database_url=database_url) as session:
                store = SqlStore(session)
                user_id = store.ensure_user(
                    username=username, email=email or f"{username}@localhost"
                )
                # Store the previewed batch as is.
                if provider:
                    wallet = store.ensure_wallet(user_id)
                    rows = list(store_wallet_transactions(batch, store=store, wallet_id=wallet.id))
                else:
                    rows = list(store_transactions(batch, store=store, user_id=user_id))
        except Exception as e:
            raise _fail(f"persistence failed: {e}") from e

    _emit(rows)
    verb = "Stored" if persist else "Imported"
    typer.echo(f"{verb} {len(rows)} of {batch.total} rows ({batch.skipped} skipped)")


@app.command("detect-columns")
def detect_columns_cmd(file_path: Annotated[Path, FILE_PATH_OPTION]) -> None:
    """Print ``role<TAB>header`` for every column role found in the header row."""

    from .ingest.decoder import decode, headers_of
    from .ingest.roles import detect_roles

    try:
        content, kind = _read_file(file_path)
        rows = decode(content, kind)
    except DecodeError as e:
        raise _fail(f"Failed to read {file_path}: {e}") from e

    roles = detect_roles(headers_of(rows))
    if not roles:
        typer.echo("No columns recognized.")
        return
    for role, header in roles.items():
        typer.echo(f"{role}\t{header}")


@app.command("providers")
def providers_cmd() -> None:
    """List supported provider ids and their labels."""

    from .ingest.providers import provider_labels

    for pid, label in provider_labels().items():
        typer.echo(f"{pid}\t{label}")


@app.command("init-db")
def init_db_cmd(
    database_url: str | None = typer.Option(
        None, help="Override BACHATBOX_DATABASE_URL/DATABASE_URL."
    ),
) -> None:
    """Upgrade the database schema to the latest Alembic revision."""

    from alembic import command
    from alembic.config import Config

    from db.client import resolve_database_url
    from db.migrations import alembic_dir

    try:
        url = resolve_database_url(database_url)
        script_location = alembic_dir()
    except (RuntimeError, FileNotFoundError) as e:
        raise _fail(str(e)) from e

    cfg = Config()
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", url)
    command.upgrade(cfg, "head")
    typer.echo("Database is up to date.")


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="-v for import summaries, -vv for per-row detail."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors."),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding
    already-set variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(level_for_verbosity(verbose, quiet))

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    app()
