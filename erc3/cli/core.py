"""erc3: command-line interface for the ERC3 core API.

Benchmarks, sessions and tasks. For the benchmark-specific APIs use
``erc3-store`` and ``erc3-demo``. Every command prints JSON.

Common workflow:
    erc3 benchmarks
    erc3 session:start store --workspace my-ws --name "Test"
    erc3 session:status <session-id>
    erc3 task:start <task-id>
    erc3-store products <task-id> --limit 3
    erc3 task:complete <task-id>
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
    resolve_base_url,
    run_command,
)
from erc3.client import get_api_key


def cmd_benchmarks(args):
    print_json(build_client(args).list_benchmarks())


def cmd_benchmark(args):
    print_json(build_client(args).view_benchmark(args.benchmark))


def cmd_session_start(args):
    client = build_client(args)
    print_json(client.start_session(
        benchmark=args.benchmark,
        workspace=args.workspace,
        name=args.name,
        architecture=args.architecture,
    ))


def cmd_session_status(args):
    print_json(build_client(args).session_status(args.session_id))


def cmd_session_search(args):
    criteria = {}
    if args.workspace:
        criteria["workspace"] = args.workspace
    if args.benchmark:
        criteria["benchmark"] = args.benchmark
    print_json(build_client(args).search_sessions(criteria))


def cmd_session_submit(args):
    print_json(build_client(args).submit_session(args.session_id))


def cmd_task_start(args):
    print_json(build_client(args).start_task(args.task_id))


def cmd_task_view(args):
    print_json(build_client(args).view_task(args.task_id, since=args.since))


def cmd_task_complete(args):
    print_json(build_client(args).complete_task(args.task_id))


def cmd_task_log(args):
    client = build_client(args)
    print_json(client.log_llm(
        args.task_id,
        model=args.model,
        usage={
            "prompt_tokens": args.prompt_tokens,
            "completion_tokens": args.completion_tokens,
        },
        duration_sec=args.duration,
    ))


def cmd_get_key(args):
    print_json(get_api_key(args.email, resolve_base_url(args)))


COMMANDS = {
    "benchmarks": cmd_benchmarks,
    "benchmark": cmd_benchmark,
    "session:start": cmd_session_start,
    "session:status": cmd_session_status,
    "session:search": cmd_session_search,
    "session:submit": cmd_session_submit,
    "task:start": cmd_task_start,
    "task:view": cmd_task_view,
    "task:complete": cmd_task_complete,
    "task:log": cmd_task_log,
    "get-key": cmd_get_key,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="erc3",
        description="Command-line interface for the ERC3 core API",
        epilog=ENV_HELP + "\nbenchmark-specific CLIs: erc3-store --help, erc3-demo --help",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_common_args(parser)
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("benchmarks", help="List available benchmarks")

    p = sub.add_parser("benchmark", help="View benchmark details")
    p.add_argument("benchmark", help="Benchmark id")

    p = sub.add_parser("session:start", help="Start a new session")
    p.add_argument("benchmark", help="Benchmark id")
    p.add_argument("--workspace", required=True, help="Workspace name")
    p.add_argument("--name", required=True, help="Session name")
    p.add_argument("--architecture", default="x86_64",
                   help="Architecture description (default: x86_64)")

    p = sub.add_parser("session:status", help="Get session status")
    p.add_argument("session_id")

    p = sub.add_parser("session:search", help="Search sessions")
    p.add_argument("--workspace", default=None, help="Filter by workspace")
    p.add_argument("--benchmark", default=None, help="Filter by benchmark")

    p = sub.add_parser("session:submit", help="Submit session for evaluation")
    p.add_argument("session_id")

    p = sub.add_parser("task:start", help="Start a task")
    p.add_argument("task_id")

    p = sub.add_parser("task:view", help="View task details")
    p.add_argument("task_id")
    p.add_argument("--since", type=int, default=None,
                   help="Only logs after this timestamp")

    p = sub.add_parser("task:complete", help="Complete a task")
    p.add_argument("task_id")

    p = sub.add_parser("task:log", help="Log LLM usage for a task")
    p.add_argument("task_id")
    p.add_argument("--model", required=True, help="Model name")
    p.add_argument("--prompt-tokens", type=int, required=True)
    p.add_argument("--completion-tokens", type=int, required=True)
    p.add_argument("--duration", type=float, required=True,
                   help="Duration in seconds")

    p = sub.add_parser("get-key", help="Request an API key for an email address")
    p.add_argument("email")

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
