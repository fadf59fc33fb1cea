from __future__ import annotations

import argparse
import getpass
import sys

from pydantic import ValidationError

from .log_config import setup_logging, setup_logging_from_env
from .validator import load_validator


def _read_password(args: argparse.Namespace) -> str:
    if args.password_stdin:
        return sys.stdin.readline().rstrip("\r\n")
    return getpass.getpass("Password: ")


def cmd_check(args: argparse.Namespace) -> int:
    validator = load_validator()
    if validator is None:
        print("Directory is not configured (check LDAP_* environment variables).", file=sys.stderr)
        return 2
    password = _read_password(args)
    if validator.validate(args.username, password):
        print("OK")
        return 0
    print("FAILED")
    return 1


def cmd_probe(args: argparse.Namespace) -> int:
    validator = load_validator()
    if validator is None:
        print("Directory is not configured (check LDAP_* environment variables).", file=sys.stderr)
        return 2
    endpoint = validator.cfg.endpoint
    if validator.probe():
        print(f"{endpoint} reachable")
        return 0
    print(f"{endpoint} unreachable")
    return 1


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bindauth", description="Validate credentials with an LDAP simple bind")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("check", help="bind as USERNAME@domain and report OK/FAILED")
    p.add_argument("username")
    p.add_argument("--password-stdin", action="store_true", help="read the password from the first line of stdin")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("probe", help="check TCP reachability of the directory")
    p.set_defaults(func=cmd_probe)

    p = sub.add_parser("serve", help="run the HTTP validation endpoint")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        setup_logging_from_env()
    except ValidationError:
        setup_logging()

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
