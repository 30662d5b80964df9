#!/usr/bin/env python3
"""Run the ERC3 demo benchmark end to end.

Starts a demo session, reads each task's secret, answers with it and
completes the task. The second task, when present, goes through the
dispatch path that LLM agents use.

Usage:
    ERC3_API_KEY=... python scripts/run_demo.py --workspace my-ws
    python scripts/run_demo.py --config erc3.yaml --no-submit
"""

import argparse
import logging
import sys

from erc3 import ERC3, ApiError, load_config

logger = logging.getLogger("erc3.scripts.demo")


def main():
    parser = argparse.ArgumentParser(description="Run the ERC3 demo benchmark")
    parser.add_argument("--config", default=None,
                        help="YAML file with api_key, base_url and timeout")
    parser.add_argument("--workspace", default="demo-example", help="Workspace name")
    parser.add_argument("--name", default="Demo API Example", help="Session name")
    parser.add_argument("--no-submit", action="store_true",
                        help="Leave the session open instead of submitting it")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    client = ERC3.from_config(load_config(args.config))

    try:
        session = client.start_session(benchmark="demo", workspace=args.workspace,
                                       name=args.name)
        status = client.session_status(session["session_id"])
        logger.info(f"Session {session['session_id']}: {len(status['tasks'])} tasks")

        for i, task in enumerate(status["tasks"]):
            client.start_task(task)
            demo = client.get_demo_client(task)

            if i == 0:
                secret = demo.get_secret()["value"]
                demo.submit_answer(secret)
            else:
                secret = demo.dispatch({"tool": "/secret"})["value"]
                demo.dispatch({"tool": "/answer", "answer": secret})

            result = client.complete_task(task)
            success = (result.get("eval") or {}).get("success")
            print(f"Task {task['task_id']}: secret={secret!r} success={success}")

        if not args.no_submit:
            client.submit_session(session["session_id"])
            print(f"Session {session['session_id']} submitted")
    except ApiError as e:
        print(f"API Error: {e.message}", file=sys.stderr)
        print(f"Status: {e.status}", file=sys.stderr)
        print(f"Code: {e.code}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
