"""Application bootstrap for the HandoffDesk client."""

from __future__ import annotations

import sys
from typing import List, Optional

from handoffdesk._paths import APP_NAME, app_support_dir
from handoffdesk.cli import parse_arguments, run_headless_from_args
from handoffdesk.fs.exports import exports_dir
from handoffdesk.headless import HeadlessResult
from handoffdesk.logs.rotating import get_logger, log_path


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for both GUI and headless execution."""

    raw_argv = list(argv if argv is not None else sys.argv[1:])
    args, extras = parse_arguments(raw_argv)

    if args.headless:
        try:
            result = run_headless_from_args(args)
        except (ValueError, OSError) as exc:
            _emit_headless_miss(exc)
            return 2
        _print_headless_result(result)
        return result.exit_code

    if args.assignments or args.output:
        print("Note: --set and --output only apply with --headless", file=sys.stderr, flush=True)

    sys.argv = [sys.argv[0]] + extras
    return _launch_gui()


def _launch_gui() -> int:
    from PySide6.QtWidgets import QApplication

    from handoffdesk.ui.hidpi import apply as _hdpi_apply
    from handoffdesk.ui.main_window import MainWindow

    _hdpi_apply()
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)

    support_dir = app_support_dir()
    logger = get_logger()
    logger.info("GUI start support_dir=%s exports=%s", support_dir, exports_dir())
    print(f"HandoffDesk: log file {log_path()}", flush=True)

    window = MainWindow(app_support_dir=support_dir)
    window.show()

    result = app.exec()
    logger.info("GUI event loop exited (%s)", result)
    return result


def _print_headless_result(result: HeadlessResult) -> None:
    print(result.report_text, flush=True)
    if result.txt_path:
        print(f"\nTXT: {result.txt_path}", file=sys.stderr, flush=True)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr, flush=True)


def _emit_headless_miss(exc: Exception) -> None:
    reason = "output_failed" if isinstance(exc, OSError) else "invalid_args"
    print(f"HEADLESS_MISS reason={reason}", flush=True)
    print(f"Headless error: {exc}", file=sys.stderr, flush=True)


if __name__ == "__main__":
    sys.exit(main())
