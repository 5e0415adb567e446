"""Command-line interface for prefix-purge.

Commands:
    - list: List every object key under an S3 prefix
    - delete: Delete every object under an S3 prefix in batches

Ctrl-C during ``delete`` requests cancellation: the batch in flight finishes,
no further batches are sent, and the partial summary is still printed.
"""

import signal
import threading
from contextlib import contextmanager
from typing import Annotated, Iterator, Optional

import typer

from . import __version__
from .cli_params import (
    aws_access_key_option,
    aws_endpoint_url_option,
    aws_profile_option,
    aws_region_option,
    aws_secret_key_option,
    aws_session_token_option,
    batch_size_option,
    page_size_option,
)
from .core import CancellationToken
from .objectstorage import (
    DeletionOutcome,
    delete_objects_by_prefix,
    list_objects_by_prefix,
)

app = typer.Typer(
    name="prefix-purge",
    help="Bulk-delete S3 objects that share a key prefix.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"prefix-purge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    prefix-purge: list and bulk-delete S3 objects by key prefix.
    """
    pass


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """Turn SIGINT into a cancellation request for the duration of the block.

    Only the first interrupt is caught. The previous handler is put back at
    once, so a second Ctrl-C stops a hung request the usual way.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    previous = signal.getsignal(signal.SIGINT)
    if previous is None:
        previous = signal.default_int_handler

    def _handler(signum, frame):
        signal.signal(signal.SIGINT, previous)
        typer.echo(
            "Interrupt received, stopping after the current batch "
            "(Ctrl-C again to abort)...",
            err=True,
        )
        token.cancel()

    signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


def _print_outcome(s3_path: str, outcome: DeletionOutcome) -> None:
    summary = outcome.summary
    typer.echo(f"Prefix: {s3_path}")
    typer.echo(f"Status: {outcome.stop_reason.value}")
    typer.echo(f"Found: {summary.total_found:,}")
    typer.echo(f"Deleted: {summary.total_deleted:,}")
    typer.echo(f"Errors: {len(summary.errors):,}")
    if summary.unaccounted:
        typer.echo(
            f"Unaccounted: {summary.unaccounted:,} "
            "(store reported neither deleted nor failed)"
        )
    for error in summary.errors:
        typer.echo(f"  {error.key}: {error.code} {error.message}", err=True)
    if outcome.error:
        typer.echo(f"Error: {outcome.error}", err=True)


@app.command("list")
def list_cmd(
    s3_path: Annotated[str, typer.Argument(help="S3 path, s3://bucket/prefix")],
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[str, aws_region_option()] = "us-east-1",
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
    page_size: Annotated[Optional[int], page_size_option()] = None,
) -> None:
    """
    List every object key under a prefix.

    Example:
        prefix-purge list s3://bucket/prefix/ --aws-profile myprofile
    """
    try:
        keys = list_objects_by_prefix(
            s3_path,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
            page_size=page_size,
        )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for key in keys:
        typer.echo(key)
    typer.echo(f"Found {len(keys):,} objects.", err=True)


@app.command("delete")
def delete_cmd(
    s3_path: Annotated[str, typer.Argument(help="S3 path, s3://bucket/prefix")],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Only list what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation."),
    ] = False,
    batch_size: Annotated[Optional[int], batch_size_option()] = None,
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[str, aws_region_option()] = "us-east-1",
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
    page_size: Annotated[Optional[int], page_size_option()] = None,
) -> None:
    """
    Delete every object under a prefix.

    Exits with status 1 unless every listed object was deleted without
    errors or interruption.

    Examples:
        prefix-purge delete s3://bucket/tmp/ --dry-run
        prefix-purge delete s3://bucket/tmp/ --yes --batch-size 500
    """
    connection = dict(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
        page_size=page_size,
    )

    if dry_run:
        try:
            keys = list_objects_by_prefix(s3_path, **connection)
        except Exception as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        for key in keys:
            typer.echo(f"[dry-run] would delete {key}")
        typer.echo(f"[dry-run] {len(keys):,} objects would be deleted.")
        return

    if not yes:
        typer.confirm(
            f"Delete every object under {s3_path}? This cannot be undone",
            abort=True,
        )

    try:
        with cancel_on_interrupt(CancellationToken()) as token:
            outcome = delete_objects_by_prefix(
                s3_path,
                batch_size=batch_size,
                cancellation=token,
                **connection,
            )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _print_outcome(s3_path, outcome)
    if not outcome.success:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
