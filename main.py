"""
totpgen – command-line entry point.

Usage
-----
    python main.py generate MYSECRET
    python main.py verify 123456 MYSECRET --window 2

Or, if installed as a package:
    totpgen --help
"""

import logging
import sys
from typing import Optional

import click

from core.errors import TOTPError
from core.totp import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    DEFAULT_WINDOW,
    Algorithm,
    enumerate_valid_codes,
    generate_totp,
    generate_totp_from_date_string,
    remaining_seconds,
    verify_totp,
)
from core.utils import decode_base32_secret, format_otp

logger = logging.getLogger("totpgen")

DEMO_SECRET = "MICLAVESECRATACOMPARTIDACONELSERVIDOR"
DEMO_DATE = "202503131728"


# ── Logging setup ─────────────────────────────────────────────────────────────

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # Keyed-hash internals stay quiet even in verbose mode
    logging.getLogger("core.crypto").setLevel(logging.WARNING)


# ── Shared options ────────────────────────────────────────────────────────────

def _otp_options(func):
    """Attach the parameters shared by every code-producing command."""
    options = [
        click.option(
            "--digits", "-d", type=int, default=DEFAULT_DIGITS, show_default=True,
            envvar="TOTP_DIGITS", help="Number of digits in the code.",
        ),
        click.option(
            "--time-step", "-s", type=int, default=DEFAULT_TIME_STEP, show_default=True,
            envvar="TOTP_TIME_STEP", help="Time step in seconds.",
        ),
        click.option(
            "--algorithm", "-a",
            type=click.Choice([alg.value for alg in Algorithm], case_sensitive=False),
            default=Algorithm.SHA1.value, show_default=True,
            envvar="TOTP_ALGORITHM", help="HMAC algorithm.",
        ),
        click.option(
            "--base32", is_flag=True,
            help="Treat SECRET as an authenticator-app base32 key instead of UTF-8 text.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _window_option(func):
    return click.option(
        "--window", "-w", "window_size", type=int, default=DEFAULT_WINDOW, show_default=True,
        envvar="TOTP_WINDOW", help="Time steps accepted on either side of now.",
    )(func)


def _secret_bytes(secret: str, base32: bool):
    if not base32:
        return secret
    try:
        return decode_base32_secret(secret)
    except TOTPError as exc:
        raise click.BadParameter(str(exc), param_hint="SECRET") from exc


# ── Commands ──────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Generate and verify RFC 6238 time-based one-time passwords."""
    _configure_logging(verbose)


@cli.command()
@click.argument("secret", envvar="TOTP_SECRET")
@_otp_options
@click.option("--timestamp", "-t", type=int, default=None, help="Unix time to use instead of now.")
@click.option("--date", "date_string", default=None, metavar="YYYYMMDDHHMM", help="UTC minute to use instead of now.")
@click.option("--grouped", is_flag=True, help="Print the code in groups of three digits.")
def generate(
    secret: str,
    digits: int,
    time_step: int,
    algorithm: str,
    base32: bool,
    timestamp: Optional[int],
    date_string: Optional[str],
    grouped: bool,
) -> None:
    """Print the code for SECRET."""
    if timestamp is not None and date_string is not None:
        raise click.UsageError("--timestamp and --date are mutually exclusive.")

    key = _secret_bytes(secret, base32)
    try:
        if date_string is not None:
            if time_step != DEFAULT_TIME_STEP:
                raise click.UsageError("--date always uses a 30 second time step.")
            code = generate_totp_from_date_string(date_string, key, digits=digits, algorithm=algorithm)
        else:
            code = generate_totp(key, digits=digits, time_step=time_step, timestamp=timestamp, algorithm=algorithm)
    except TOTPError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(format_otp(code) if grouped else code)


@cli.command()
@click.argument("code")
@click.argument("secret", envvar="TOTP_SECRET")
@_otp_options
@_window_option
def verify(
    code: str,
    secret: str,
    digits: int,
    time_step: int,
    algorithm: str,
    base32: bool,
    window_size: int,
) -> None:
    """Check CODE against SECRET; exits with status 1 when it is rejected."""
    key = _secret_bytes(secret, base32)
    try:
        ok = verify_totp(code, key, digits=digits, time_step=time_step, window_size=window_size, algorithm=algorithm)
    except TOTPError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo("VALID" if ok else "INVALID")
    if not ok:
        sys.exit(1)


@cli.command()
@click.argument("secret", envvar="TOTP_SECRET")
@_otp_options
@_window_option
def window(
    secret: str,
    digits: int,
    time_step: int,
    algorithm: str,
    base32: bool,
    window_size: int,
) -> None:
    """List every code currently accepted for SECRET."""
    key = _secret_bytes(secret, base32)
    try:
        codes = enumerate_valid_codes(key, digits=digits, time_step=time_step, window_size=window_size, algorithm=algorithm)
    except TOTPError as exc:
        raise click.ClickException(str(exc)) from exc

    for offset, code in codes.items():
        click.echo(f"{offset:+d}\t{code}")


@cli.command()
def demo() -> None:
    """Run the reference scenario for the demo secret."""
    code6 = generate_totp_from_date_string(DEMO_DATE, DEMO_SECRET, digits=6)
    code8 = generate_totp_from_date_string(DEMO_DATE, DEMO_SECRET, digits=8)
    click.echo(f"6-digit code for {DEMO_DATE}: {code6}")
    click.echo(f"8-digit code for {DEMO_DATE}: {code8}")

    current = generate_totp(DEMO_SECRET, digits=6)
    click.echo(f"Current 6-digit code: {current} ({remaining_seconds()}s left)")
    valid = verify_totp(current, DEMO_SECRET)
    click.echo(f"Current code verifies: {'yes' if valid else 'no'}")

    click.echo("Codes accepted right now:")
    for offset, code in enumerate_valid_codes(DEMO_SECRET, window_size=2).items():
        click.echo(f"  {offset:+d}\t{code}")


@cli.command()
@click.argument("secret", envvar="TOTP_SECRET")
@_otp_options
@_window_option
def gui(
    secret: str,
    digits: int,
    time_step: int,
    algorithm: str,
    base32: bool,
    window_size: int,
) -> None:
    """Open the window inspector for SECRET."""
    # Qt is only needed for this command
    from PyQt6.QtWidgets import QApplication

    from ui.main_window import MainWindow, OTPProfile
    from ui.styles import DARK_STYLESHEET

    profile = OTPProfile(
        secret=_secret_bytes(secret, base32),
        digits=digits,
        time_step=time_step,
        window_size=window_size,
        algorithm=Algorithm.parse(algorithm),
    )
    try:
        profile.validate()
    except TOTPError as exc:
        raise click.ClickException(str(exc)) from exc

    app = QApplication(sys.argv[:1])
    app.setApplicationName("totpgen")
    app.setStyleSheet(DARK_STYLESHEET)

    main_window = MainWindow(profile)
    main_window.show()
    logger.info("Window inspector opened (%s, %d digits, ±%d steps).", profile.algorithm.value, digits, window_size)
    sys.exit(app.exec())


if __name__ == "__main__":
    cli()
