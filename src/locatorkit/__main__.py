from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any, Sequence

from .config import load_options
from .errors import CaptureError, InvalidDescriptorError, UnsupportedDialectError
from .runtime_checks import interpreter_problem

EXIT_INVALID_INPUT = 2
EXIT_CAPTURE_FAILED = 1


def _build_logger(verbose: bool) -> logging.Logger:
    logger = logging.getLogger("locatorkit")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logging.getLogger("locatorkit.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="locatorkit", description="Synthesize ranked locators for a page element.")
    parser.add_argument("--config", type=Path, default=None, help="Options JSON (default ~/.locatorkit/config.json).")
    parser.add_argument(
        "--dialect",
        action="append",
        dest="dialects",
        default=None,
        help="Dialect to render; repeat for several. Defaults to the configured dialects.",
    )
    parser.add_argument("--analyze", action="store_true", help="Include element analysis and suggestions.")
    parser.add_argument("-v", "--verbose", action="store_true")
    commands = parser.add_subparsers(dest="command", required=True)

    describe = commands.add_parser("describe", help="Read a descriptor payload from JSON.")
    describe.add_argument("source", help="JSON file, or '-' for stdin.")

    inspect = commands.add_parser("inspect", help="Capture an element from a live page.")
    inspect.add_argument("url")
    inspect.add_argument("selector")
    inspect.add_argument("--browser", choices=("chromium", "firefox", "webkit"), default="chromium")
    inspect.add_argument("--timeout-ms", type=int, default=30_000)
    inspect.add_argument("--headed", action="store_true")
    return parser


def _read_payload(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def run(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logger = _build_logger(args.verbose)
    options = load_options(args.config)

    from .analysis import analyze_element
    from .dom_extractor import descriptor_from_payload
    from .locator_generator import synthesize_and_render

    try:
        if args.command == "describe":
            try:
                payload = _read_payload(args.source)
            except (OSError, ValueError) as exc:
                logger.error("Could not read descriptor: %s", exc)
                return EXIT_INVALID_INPUT
            descriptor = descriptor_from_payload(payload)
        else:
            from .browser_capture import CaptureOptions, capture_descriptor

            descriptor = capture_descriptor(
                args.url,
                args.selector,
                CaptureOptions(
                    browser=args.browser,
                    viewport=options.viewport,
                    timeout_ms=args.timeout_ms,
                    headless=not args.headed,
                ),
            )
        locator_set, renderings = synthesize_and_render(descriptor, args.dialects, options)
    except (InvalidDescriptorError, UnsupportedDialectError) as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_INPUT
    except CaptureError as exc:
        logger.error("%s", exc)
        return EXIT_CAPTURE_FAILED

    result: dict[str, Any] = {
        "element": descriptor.to_dict(),
        "locators": locator_set.to_dict(),
        "dialects": {name: rendering.to_dict() for name, rendering in renderings.items()},
    }
    if args.analyze:
        result["analysis"] = analyze_element(descriptor, options).to_dict()
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def main() -> int:
    problem = interpreter_problem()
    if problem:
        raise SystemExit(problem)
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
