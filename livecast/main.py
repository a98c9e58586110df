"""Command line entry point: run one live streaming session.

Run:
    python -m livecast --hold-seconds 300
"""

import argparse
import asyncio
import sys
import threading

from loguru import logger

from livecast.app_config import get_app_environ_config
from livecast.domain.live.session import SessionOrchestrator
from livecast.domain.live.session.session_orchestrator import HoldCallback
from livecast.schemas import LiveSessionOutput, SessionRunResult
from livecast.shared.logger import init_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="livecast",
        description="Provision a live event, print its ingest and playback URLs, then clean up.",
    )
    hold = parser.add_mutually_exclusive_group()
    hold.add_argument(
        "--hold-seconds",
        type=float,
        default=0,
        help="Keep the session running this many seconds before cleanup",
    )
    hold.add_argument(
        "--interactive",
        action="store_true",
        help="Keep the session running until Enter is pressed",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args(argv)


async def wait_for_enter() -> None:
    """Wait for a line on stdin without pinning interpreter shutdown.

    The read runs on a daemon thread, so a cancelled wait (Ctrl-C) lets the
    process exit after cleanup instead of blocking until Enter is pressed.
    """
    loop = asyncio.get_running_loop()
    entered = loop.create_future()

    def resolve() -> None:
        if not entered.done():
            entered.set_result(None)

    def read_line() -> None:
        sys.stdin.readline()
        try:
            loop.call_soon_threadsafe(resolve)
        except RuntimeError:
            # Loop already closed: the session ended before Enter was pressed.
            return

    threading.Thread(target=read_line, name="livecast-stdin", daemon=True).start()
    await entered


def build_hold(args: argparse.Namespace) -> HoldCallback | None:
    if args.interactive:

        async def hold_until_enter(output: LiveSessionOutput) -> None:
            # stdout carries the JSON result; prompts go to stderr.
            print(
                f"Stream to {output.ingest_url} and watch {output.preview_endpoint}",
                file=sys.stderr,
            )
            print("Press Enter to stop the session and clean up... ", file=sys.stderr, flush=True)
            await wait_for_enter()

        return hold_until_enter

    if args.hold_seconds > 0:

        async def sleep_for(output: LiveSessionOutput) -> None:
            logger.info(f"⏱️  Holding live session for {args.hold_seconds}s before cleanup")
            await asyncio.sleep(args.hold_seconds)

        return sleep_for

    return None


async def run_session(args: argparse.Namespace) -> SessionRunResult:
    orchestrator = SessionOrchestrator(hold=build_hold(args))
    return await orchestrator.run()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = get_app_environ_config()
    init_logger(args.log_level or cfg.LOG_LEVEL)

    try:
        result = asyncio.run(run_session(args))
    except Exception as e:
        logger.exception(f"Error running live streaming: {e}")
        return 1

    print(result.model_dump_json(by_alias=True, indent=2))
    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
