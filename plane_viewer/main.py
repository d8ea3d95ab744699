"""Entry point for the plane viewer."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from plane_viewer.core.config import load_config

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive 2D plane viewer")
    parser.add_argument(
        "--log-level",
        default=os.getenv("PLANE_VIEWER_LOG_LEVEL", "INFO"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to PLANE_VIEWER_LOG_LEVEL "
            "environment variable or INFO."
        ),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("PLANE_VIEWER_LOG_PATH"),
        help=(
            "Optional log file path. Defaults to plane_viewer_log.txt next to the "
            "executable."
        ),
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Path to settings.ini. Defaults to PLANE_VIEWER_SETTINGS or settings.ini next to the executable.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    return parser.parse_args(argv)


def configure_logging(log_level_name: str, log_path: str | None) -> str:
    resolved_level_name = log_level_name.upper()
    log_level = getattr(logging, resolved_level_name, logging.INFO)

    if not log_path:
        base_dir = os.path.dirname(sys.argv[0])
        log_path = os.path.join(base_dir, "plane_viewer_log.txt")

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )

    return log_path


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    log_level_name = "DEBUG" if args.debug else args.log_level
    log_path = configure_logging(log_level_name, args.log_file)
    logger.info("Starting Plane Viewer (log level %s, log file %s)", log_level_name.upper(), log_path)

    try:
        config = load_config(args.settings)
    except ValueError:
        logger.exception("Invalid settings file")
        sys.exit(2)

    from plane_viewer.ui.main_window import PlaneViewerApp, PlaneViewerWindow

    app = PlaneViewerApp(sys.argv)
    window = PlaneViewerWindow(config)
    app.window = window
    window.show()

    def cleanup() -> None:
        try:
            if window:
                window.close()
        except Exception:  # pragma: no cover - best effort
            logger.exception("Unexpected error while closing window")

    app.aboutToQuit.connect(cleanup)
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
