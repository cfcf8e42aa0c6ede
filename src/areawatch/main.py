"""Command-line entry point for debugging regions and waits.

    areawatch highlight X Y W H [--caption TEXT] [--seconds N]
    areawatch wait TEMPLATE [--region X Y W H] [--timeout MS] [--threshold T]
                            [--count N | --vanish]

Initializes configuration and logging, then either shows a region on the
overlay or waits for a template and prints what happened. Exit code 0 means
the wait succeeded.
"""

import argparse
import logging
import sys
from typing import List, Optional

from areawatch.controllers.polling import Waiter, WaitOutcome
from areawatch.controllers.vision import VisionController
from areawatch.core.config import ConfigManager
from areawatch.core.logging_setup import setup_logging
from areawatch.core.region import Region
from areawatch.vision.pattern import TemplatePattern

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="areawatch", description="Screen region waits and overlay highlights.")
    parser.add_argument("--config", help="path to config.ini (default: per-user config)")
    parser.add_argument("--log-level", help="override DEFAULT.log_level")
    sub = parser.add_subparsers(dest="command", required=True)

    hl = sub.add_parser("highlight", help="outline a region on the overlay")
    hl.add_argument("rect", nargs=4, type=int, metavar=("X", "Y", "W", "H"))
    hl.add_argument("--caption", help="caption drawn at the region's top-left")
    hl.add_argument("--seconds", type=float, default=3.0, help="how long to keep the overlay up")

    wt = sub.add_parser("wait", help="wait for a template image to appear")
    wt.add_argument("template", help="template image file")
    wt.add_argument("--region", nargs=4, type=int, metavar=("X", "Y", "W", "H"),
                    help="search region (default: the whole virtual screen)")
    wt.add_argument("--timeout", type=int, help="timeout in ms (default: wait_timeout_ms)")
    wt.add_argument("--threshold", type=float, help="match threshold (default: match_threshold)")
    mode = wt.add_mutually_exclusive_group()
    mode.add_argument("--count", type=_non_negative_int, help="wait until at least N occurrences are visible")
    mode.add_argument("--vanish", action="store_true", help="wait for the template to disappear")
    wt.add_argument("--snapshot", action="store_true", help="save the region to the session artifacts")
    return parser


def _region(config_manager: ConfigManager, rect: Optional[List[int]]) -> Region:
    options = config_manager.region_options()
    if rect is None:
        return Region.full_screen(**options)
    return Region.from_xywh(*rect, **options)


def run_highlight(args, config_manager: ConfigManager) -> int:
    # Qt must exist on this (main) thread before the overlay is created
    from PyQt6.QtCore import QTimer
    from PyQt6.QtWidgets import QApplication

    from areawatch.gui.coordinator import OverlayCoordinator

    app = QApplication.instance() or QApplication([])
    overlay = OverlayCoordinator()
    overlay.ensure_renderer()

    region = _region(config_manager, args.rect)
    overlay.highlight_border(region)
    if args.caption:
        overlay.caption(region, args.caption)
    logger.info("highlight: %r for %.1fs", region, args.seconds)

    QTimer.singleShot(int(max(0.0, args.seconds) * 1000), app.quit)
    app.exec()
    overlay.close()
    return 0


def run_wait(args, config_manager: ConfigManager) -> int:
    threshold = args.threshold if args.threshold is not None else config_manager.get_float("match_threshold", 0.9)
    pattern = TemplatePattern(args.template, threshold=threshold)
    region = _region(config_manager, args.region)
    vision = VisionController()
    waiter = Waiter.from_config(config_manager, vision)

    if args.snapshot:
        vision.save_snapshot(region)

    if args.vanish:
        outcome = waiter.wait_vanish(region, pattern, args.timeout)
        print(outcome.value)
        return 0 if outcome is WaitOutcome.VANISHED else 1

    if args.count is not None:
        matches = waiter.wait_for_count(region, pattern, args.count, args.timeout)
        for m in matches:
            print(f"{tuple(m.area_in(region).rectangle)} score={m.score:.3f}")
        return 0 if len(matches) >= args.count else 1

    match = waiter.wait_for(region, pattern, args.timeout)
    if match is None:
        print("not found")
        return 1
    print(f"{tuple(match.area_in(region).rectangle)} score={match.score:.3f}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    config_manager = ConfigManager(args.config)
    setup_logging(config_manager, args.log_level)

    try:
        if args.command == "highlight":
            return run_highlight(args, config_manager)
        return run_wait(args, config_manager)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
