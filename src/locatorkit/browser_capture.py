from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal

from .dom_extractor import extract_descriptor_for_selector
from .errors import CaptureError
from .models import ElementDescriptor
from .runtime_checks import is_missing_browser_error

BrowserName = Literal["chromium", "firefox", "webkit"]


@dataclass(frozen=True, slots=True)
class CaptureOptions:
    browser: BrowserName = "chromium"
    viewport: tuple[int, int] = (1280, 720)
    wait_for_selector: str | None = None
    timeout_ms: int = 30_000
    headless: bool = True


logger = logging.getLogger("locatorkit.capture")


def capture_descriptor(url: str, selector: str, options: CaptureOptions | None = None) -> ElementDescriptor:
    """Open ``url`` in a fresh browser and describe the first ``selector`` match."""
    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    opts = options or CaptureOptions()
    target = url.strip()
    if not target:
        raise CaptureError("URL is required.")

    logger.info("Capturing %r on %s with %s", selector, target, opts.browser)
    try:
        with sync_playwright() as playwright:
            launcher = getattr(playwright, opts.browser)
            browser = launcher.launch(headless=opts.headless)
            try:
                context = browser.new_context(
                    viewport={"width": opts.viewport[0], "height": opts.viewport[1]},
                )
                page = context.new_page()
                page.set_default_timeout(opts.timeout_ms)
                page.goto(target, wait_until="domcontentloaded")
                page.wait_for_selector(opts.wait_for_selector or selector, state="attached")
                descriptor = extract_descriptor_for_selector(page, selector)
            finally:
                browser.close()
    except PlaywrightError as exc:
        if is_missing_browser_error(exc):
            raise CaptureError(
                f"Playwright {opts.browser} is not installed. Run `playwright install {opts.browser}`."
            ) from exc
        raise CaptureError(f"Capture failed: {exc}") from exc

    if descriptor is None:
        raise CaptureError(f"No element matched selector {selector!r} on {target}.")
    return descriptor
