"""Command-line interface for inspecting JWTs."""

from __future__ import annotations

import json

import click
import structlog
from safir.click import display_help
from safir.logging import LogLevel, Profile, configure_logging

from .exceptions import JWTError
from .jwt import JWT

__all__ = [
    "decode",
    "help",
    "main",
    "signing_input",
    "validate",
]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
@click.option(
    "--log-level",
    envvar="RFC7519_LOG_LEVEL",
    type=click.Choice([level.value for level in LogLevel]),
    default=LogLevel.WARNING.value,
    show_default=True,
    help="Log level for diagnostic output.",
)
def main(*, log_level: str) -> None:
    """Inspect and validate JSON Web Tokens in compact form."""
    configure_logging(
        name="rfc7519", profile=Profile.development, log_level=log_level
    )


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@click.argument("token")
def decode(*, token: str) -> None:
    """Print the header, payload, and signature of a token.

    The signature is not checked. Use - as TOKEN to read from standard
    input.
    """
    jwt = _parse_token(token)
    result = {
        "header": jwt.header.to_json_dict(),
        "payload": jwt.payload.to_json_dict(),
        "signature": jwt.encoded_signature(),
    }
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@main.command("signing-input")
@click.argument("token")
def signing_input(*, token: str) -> None:
    """Print the input a signature over the token is computed on."""
    jwt = _parse_token(token)
    click.echo(jwt.signing_input().decode("ascii"))


@main.command()
@click.argument("token")
@click.option(
    "--clock-skew",
    type=click.FloatRange(min=0),
    default=60.0,
    show_default=True,
    help="Tolerance in seconds for the exp and nbf claims.",
)
@click.option(
    "--now",
    type=float,
    default=None,
    help="Check against this time in seconds since epoch.",
)
def validate(*, token: str, clock_skew: float, now: float | None) -> None:
    """Check the timing claims of a token.

    The signature is not checked. Exits with an error if the token cannot be
    parsed, has expired, or is not yet valid.
    """
    jwt = _parse_token(token)
    try:
        jwt.payload.validate_timing(now, clock_skew)
    except JWTError as e:
        raise click.ClickException(str(e)) from e
    click.echo("Token is valid")


def _parse_token(token: str) -> JWT:
    """Parse a token given on the command line, or stdin if it is ``-``."""
    logger = structlog.get_logger("rfc7519")
    if token == "-":
        token = click.get_text_stream("stdin").read().strip()
    try:
        jwt = JWT.parse(token)
    except JWTError as e:
        raise click.ClickException(str(e)) from e
    logger.debug("Parsed token", alg=jwt.header.alg, kid=jwt.header.kid)
    return jwt
