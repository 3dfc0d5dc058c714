import argparse
import logging
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from fuzztester.config import TRANSPORTS, Settings, build_transport, configure_logging
from fuzztester.draft import RequestDraft
from fuzztester.models import BodyFormat, HttpMethod, RunState, parse_body_format
from fuzztester.notifier import LogNotifier, attach
from fuzztester.runner import TestRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fuzztester")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--url", help="Target URL; runs a single test when given")
    parser.add_argument(
        "--method",
        default=HttpMethod.POST.value,
        type=str.upper,
        choices=[method.value for method in HttpMethod],
        help="HTTP method (default: POST)",
    )
    parser.add_argument(
        "--format",
        dest="body_format",
        default=BodyFormat.JSON.value,
        help="Body format: JSON, XML, FormData or Text (default: JSON)",
    )
    body_group = parser.add_mutually_exclusive_group()
    body_group.add_argument("--body", help="Body text; defaults to the format's template")
    body_group.add_argument("--body-file", type=Path, help="Read the body text from a file")
    parser.add_argument("--transport", choices=TRANSPORTS, help="Override FUZZTESTER_TRANSPORT")
    parser.add_argument("--timeout-ms", type=int, help="Override FUZZTESTER_TIMEOUT_MS")
    parser.add_argument("--delay-ms", type=int, help="Override FUZZTESTER_SIMULATED_DELAY_MS")
    parser.add_argument("--log-level", help="Override FUZZTESTER_LOG_LEVEL")
    return parser


def build_draft(args: argparse.Namespace) -> RequestDraft:
    draft = RequestDraft(method=args.method, url=args.url)
    draft.set_body_format(parse_body_format(args.body_format))
    if args.body is not None:
        draft.set_body_content(args.body)
    elif args.body_file is not None:
        draft.set_body_content(args.body_file.read_text(encoding="utf-8"))
    return draft


def run_test(draft: RequestDraft, settings: Settings) -> int:
    app = QCoreApplication.instance() or QCoreApplication([])
    runner = TestRunner(build_transport(settings), timeout_ms=settings.timeout_ms)
    attach(runner, LogNotifier())
    outcome: dict = {}

    def on_settled(run) -> None:
        outcome["run"] = run
        app.quit()

    runner.settled.connect(on_settled)
    if not runner.start(draft):
        return 1
    app.exec()
    runner.shutdown()
    run = outcome.get("run")
    if run is None or run.state is not RunState.SUCCEEDED:
        return 1
    if run.result and run.result.get("status_code") is not None:
        logger.info("status %s in %s ms", run.result["status_code"], run.result.get("elapsed_ms"))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        from . import __version__

        print(__version__)
        return 0
    if args.url is None:
        parser.print_help()
        return 0

    settings = Settings.from_env()
    if args.transport:
        settings.transport = args.transport
    if args.timeout_ms is not None:
        settings.timeout_ms = args.timeout_ms
    if args.delay_ms is not None:
        settings.simulated_delay_ms = args.delay_ms
    if args.log_level:
        settings.log_level = args.log_level.upper()
    configure_logging(settings.log_level)

    try:
        draft = build_draft(args)
    except (ValueError, OSError) as exc:
        parser.error(str(exc))
    return run_test(draft, settings)


if __name__ == "__main__":
    raise SystemExit(main())
