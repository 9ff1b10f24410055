#!/usr/bin/env python3
"""
cli.py — CLI wrapper cho otp_core

Cung cấp các subcommand:
- init      : lưu secret, time offset, copy format vào settings file
- scan      : giải mã payload đã quét (otpauth://, otpauth-migration://, Base32)
- totp      : hiển thị mã TOTP (--watch để cập nhật liên tục)
- hotp      : sinh mã HOTP cho một counter
- remaining : số giây còn lại của mã hiện tại
- auth      : ghép mã TOTP với password theo copy format
"""

import argparse
import getpass
import logging
import sys
import time

from . import config
from .errors import OtpError
from .scan import scan_text
from .settings import Settings, compose_credential, load_settings, save_settings
from .engine import generate, hotp, time_remaining, totp

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    print(f"[!] {message}")
    sys.exit(1)


def _resolve_secret(args) -> Settings:
    """--secret wins over the settings file."""
    if getattr(args, "secret", None):
        return Settings.create(args.secret, getattr(args, "offset", 0) or 0)
    try:
        cfg = load_settings(args.settings)
    except FileNotFoundError:
        _fail(f"Settings file '{args.settings}' not found. Run 'init' or pass --secret.")
    if getattr(args, "offset", None) is not None:
        cfg = Settings(cfg.secret, args.offset, cfg.copy_format)
    return cfg


def _check_period(period: int) -> None:
    if period <= 0:
        _fail(f"--period must be a positive number of seconds, got {period}")


# --- CLI command handlers ---
def cmd_init(args):
    cfg = Settings.create(args.secret, args.offset, args.format)
    save_settings(cfg, args.settings)
    print(f"[*] Settings saved to {args.settings} (offset={cfg.time_offset}s, format={cfg.copy_format})")


def cmd_scan(args):
    payload = args.payload if args.payload != "-" else sys.stdin.read()
    result = scan_text(payload)

    print(f"[*] Found {len(result.accounts)} account(s):")
    for line in result.candidates():
        print("   ", line)

    account = result.select(args.select - 1)
    if result.is_ambiguous:
        print(f"[*] Using account {args.select}: {account.display_name}")
    if args.show_secret:
        print("    secret:", account.secret)

    if args.save:
        save_settings(Settings.create(account.secret, args.offset, args.format), args.settings)
        print(f"[+] Secret saved to {args.settings}")


def cmd_totp(args):
    _check_period(args.period)
    cfg = _resolve_secret(args)
    if not args.watch:
        result = generate(cfg.secret, cfg.time_offset, args.period, args.digits)
        if not result.ok:
            _fail(str(result.error))
        remaining = time_remaining(args.period, time_offset=cfg.time_offset)
        print(f"TOTP ({args.digits}d): {result.code}  (valid ~{remaining:2d}s)")
        return

    print(f"Press Ctrl+C to quit. Generating {args.digits}-digit TOTP every {args.period}s...\n")
    last_code = None
    try:
        while True:
            now = int(time.time())
            code, remaining = totp(cfg.secret, now, args.period, cfg.time_offset, args.digits)
            if code != last_code:
                print(f"TOTP ({args.digits}d): {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end='\r', flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")


def cmd_hotp(args):
    if args.counter < 0:
        _fail(f"--counter must not be negative, got {args.counter}")
    cfg = _resolve_secret(args)
    code = hotp(cfg.secret, args.counter, args.digits)
    print(f"HOTP({args.digits}d, counter={args.counter}): {code}")


def cmd_remaining(args):
    _check_period(args.period)
    print(time_remaining(args.period))


def cmd_auth(args):
    _check_period(args.period)
    cfg = _resolve_secret(args)
    result = generate(cfg.secret, cfg.time_offset, args.period, args.digits)
    if not result.ok:
        _fail("Error generating TOTP. Please check your secret key.")
    password = getpass.getpass("Password: ")
    if not password:
        _fail("Password is required")
    print(compose_credential(result.code, password, args.format or cfg.copy_format))


def cmd_help(args):
    print("'otp-scan -h' for help.")


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="TOTP generator and authenticator export decoder")
    p.add_argument("--settings", default=config.SETTINGS_FILE, help="Settings file (JSON)")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # init
    pi = sub.add_parser("init", help="Store TOTP secret, clock offset and copy format")
    pi.add_argument("--secret", required=True, help="Base32 secret")
    pi.add_argument("--offset", type=int, default=0, help="Clock offset in seconds")
    pi.add_argument("--format", choices=config.COPY_FORMATS, default=config.COPY_FORMAT_TOTP_FIRST)
    pi.set_defaults(func=cmd_init)

    # scan
    ps = sub.add_parser("scan", help="Decode scanned QR text ('-' reads stdin)")
    ps.add_argument("payload", help="otpauth://, otpauth-migration:// or Base32 secret")
    ps.add_argument("--select", type=int, default=1, help="Account number to use (1-based)")
    ps.add_argument("--show-secret", action="store_true", help="Print the selected secret")
    ps.add_argument("--save", action="store_true", help="Save the selected secret to settings")
    ps.add_argument("--offset", type=int, default=0, help="Clock offset stored with --save")
    ps.add_argument("--format", choices=config.COPY_FORMATS, default=config.COPY_FORMAT_TOTP_FIRST)
    ps.set_defaults(func=cmd_scan)

    # totp
    pt = sub.add_parser("totp", help="Show the current TOTP code")
    pt.add_argument("--secret", help="Override stored secret")
    pt.add_argument("--offset", type=int, help="Override clock offset (seconds)")
    pt.add_argument("--digits", type=int, default=config.DEFAULT_DIGITS)
    pt.add_argument("--period", type=int, default=config.DEFAULT_TIME_STEP)
    pt.add_argument("--watch", action="store_true", help="Refresh every second")
    pt.set_defaults(func=cmd_totp)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    ph.add_argument("--secret", help="Override stored secret")
    ph.add_argument("--counter", type=int, required=True)
    ph.add_argument("--digits", type=int, default=config.DEFAULT_DIGITS)
    ph.set_defaults(func=cmd_hotp)

    # remaining
    pr = sub.add_parser("remaining", help="Seconds until the current code rolls over")
    pr.add_argument("--period", type=int, default=config.DEFAULT_TIME_STEP)
    pr.set_defaults(func=cmd_remaining)

    # auth
    pa = sub.add_parser("auth", help="Print TOTP joined with a password")
    pa.add_argument("--secret", help="Override stored secret")
    pa.add_argument("--offset", type=int, help="Override clock offset (seconds)")
    pa.add_argument("--format", choices=config.COPY_FORMATS, help="Override copy format")
    pa.add_argument("--digits", type=int, default=config.DEFAULT_DIGITS)
    pa.add_argument("--period", type=int, default=config.DEFAULT_TIME_STEP)
    pa.set_defaults(func=cmd_auth)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except OtpError as e:
        logger.debug("Command failed: %s", e.kind)
        _fail(str(e))
    except (IndexError, ValueError) as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
