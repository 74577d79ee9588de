"""Terminal CLI entrypoint for Breathwork."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from breathwork.core.engine import TerminalSession
from breathwork.ui.controller import SessionController


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Breathwork guided breathing sessions")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch the web UI (NiceGUI) with voice prompts and ambient sound",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8090, help="Port for --ui-web")
    parser.add_argument(
        "--sounds-dir",
        type=Path,
        default=None,
        help="Directory holding rain.mp3 / forest.mp3 ambient tracks for --ui-web",
    )
    parser.add_argument(
        "--wake-video",
        type=Path,
        default=None,
        help="Silent looping video used when the browser refuses a screen wake lock",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file (default: ~/.breathwork/settings.json)",
    )
    parser.add_argument("--inhale", type=int, default=None, help="Inhale duration in seconds")
    parser.add_argument("--hold1", type=int, default=None, help="Hold after inhale, seconds")
    parser.add_argument("--exhale", type=int, default=None, help="Exhale duration in seconds")
    parser.add_argument("--hold2", type=int, default=None, help="Hold after exhale, seconds")
    parser.add_argument("--rounds", type=int, default=None, help="Number of rounds")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


async def run_terminal(session: TerminalSession) -> int:
    completed = await session.run()
    return 0 if completed else 1


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.ui_web:
        from breathwork.ui.web_app import run_web_ui

        return run_web_ui(
            host=args.web_host,
            port=args.web_port,
            sounds_dir=args.sounds_dir,
            wake_video=args.wake_video,
            settings_path=args.settings,
        )

    controller = SessionController(settings_path=args.settings)
    overrides = {
        "inhale_sec": args.inhale,
        "hold1_sec": args.hold1,
        "exhale_sec": args.exhale,
        "hold2_sec": args.hold2,
        "rounds": args.rounds,
    }
    changes = {key: value for key, value in overrides.items() if value is not None}
    for key, value in changes.items():
        minimum = 1 if key == "rounds" else 0
        if value < minimum:
            parser.error(f"--{key.removesuffix('_sec')} must be >= {minimum}")
    if changes:
        controller.update_settings(**changes)

    session = TerminalSession(controller=controller)
    try:
        return asyncio.run(run_terminal(session))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
