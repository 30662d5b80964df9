"""erc3-demo: command-line interface for the ERC3 demo API.

Usage: erc3-demo <command> <task-id> [options]

    erc3-demo secret task-123
    erc3-demo answer task-123 --answer "the secret"
"""

from __future__ import annotations

import argparse
from typing import Optional

from erc3.cli.common import (
    ENV_HELP,
    add_common_args,
    build_client,
    configure_logging,
    print_json,
    run_command,
)
from erc3.demo.models import Secret


def cmd_secret(args):
    result = build_client(args).get_demo_client(args.task_id).get_secret()
    if args.json:
        print_json(result)
        return
    secret = Secret.model_validate(result)
    print("")
    print("=== Task Secret ===")
    print(f"Secret: {secret.value}")
    print("")


def cmd_answer(args):
    build_client(args).get_demo_client(args.task_id).submit_answer(args.answer)
    print("Answer submitted successfully")


COMMANDS = {
    "secret": cmd_secret,
    "answer": cmd_answer,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="erc3-demo",
        description="Command-line interface for the ERC3 demo API",
        epilog=ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_common_args(parser)
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("secret", help="Get the task secret")
    p.add_argument("task_id")
    p.add_argument("--json", action="store_true", help="Output raw JSON")

    p = sub.add_parser("answer", help="Submit an answer")
    p.add_argument("task_id")
    p.add_argument("--answer", required=True, help="Answer text")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args)
    return run_command(COMMANDS[args.command], args)


if __name__ == "__main__":
    raise SystemExit(main())
