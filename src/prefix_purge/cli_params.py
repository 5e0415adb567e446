"""Shared CLI parameter definitions.

Both commands take the same S3 connection options. Defining them once here
keeps names, types and help text consistent between ``list`` and ``delete``.

Usage:
    @app.command()
    def my_command(
        access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
        region_name: Annotated[str, aws_region_option()] = "us-east-1",
    ):
        pass
"""

from typing import Annotated, Optional

import typer


def aws_access_key_option() -> Annotated[Optional[str], typer.Option]:
    """AWS access key ID option."""
    return typer.Option("--access-key-id", help="AWS access key ID")


def aws_secret_key_option() -> Annotated[Optional[str], typer.Option]:
    """AWS secret access key option."""
    return typer.Option("--secret-access-key", help="AWS secret access key")


def aws_session_token_option() -> Annotated[Optional[str], typer.Option]:
    """AWS session token option."""
    return typer.Option("--session-token", help="AWS session token")


def aws_region_option() -> Annotated[str, typer.Option]:
    """AWS region option."""
    return typer.Option("--region", help="AWS region name")


def aws_endpoint_url_option() -> Annotated[Optional[str], typer.Option]:
    """AWS endpoint URL option."""
    return typer.Option("--endpoint-url", help="Custom S3 endpoint URL")


def aws_profile_option() -> Annotated[Optional[str], typer.Option]:
    """AWS profile option."""
    return typer.Option("--aws-profile", help="AWS CLI profile name")


def page_size_option() -> Annotated[Optional[int], typer.Option]:
    """Keys per list request option."""
    return typer.Option(
        "--page-size", min=1, max=1000, help="Keys per list request (1-1000)"
    )


def batch_size_option() -> Annotated[Optional[int], typer.Option]:
    """Keys per delete request option."""
    return typer.Option(
        "--batch-size",
        min=1,
        max=1000,
        help="Keys per delete request (1-1000, default from settings)",
    )
