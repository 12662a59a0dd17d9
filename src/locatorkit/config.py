from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import json
import logging
from pathlib import Path
import tempfile
from typing import Any

CONFIG_DIR = Path.home() / ".locatorkit"
CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_TEST_ID_ATTRIBUTES = ("data-testid", "data-test-id", "data-cy", "data-test")
DEFAULT_DIALECTS = ("playwright", "playwright-python", "cypress", "selenium")

logger = logging.getLogger("locatorkit.config")


@dataclass(frozen=True, slots=True)
class SynthesisOptions:
    text_max_length: int = 50
    accessible_text_max_length: int = 100
    css_path_max_depth: int | None = None
    strict_ids: bool = False
    test_id_attributes: tuple[str, ...] = DEFAULT_TEST_ID_ATTRIBUTES
    viewport: tuple[int, int] = (1280, 720)
    dialects: tuple[str, ...] = DEFAULT_DIALECTS


DEFAULT_OPTIONS = SynthesisOptions()


def options_from_mapping(payload: dict[str, Any]) -> SynthesisOptions:
    known = {item.name for item in fields(SynthesisOptions)}
    values: dict[str, Any] = {}
    for key, raw in payload.items():
        if key not in known:
            logger.debug("Ignoring unknown option %r", key)
            continue
        values[key] = raw

    for key in ("test_id_attributes", "dialects"):
        if key in values:
            values[key] = tuple(str(item) for item in values[key] or ())
    if "viewport" in values:
        width, height = values["viewport"]
        values["viewport"] = (int(width), int(height))
    for key in ("text_max_length", "accessible_text_max_length"):
        if key in values:
            values[key] = int(values[key])
    if values.get("css_path_max_depth") is not None:
        values["css_path_max_depth"] = int(values["css_path_max_depth"])
    if "strict_ids" in values:
        values["strict_ids"] = bool(values["strict_ids"])
    return SynthesisOptions(**values)


def load_options(config_path: Path | None = None) -> SynthesisOptions:
    path = config_path or CONFIG_PATH
    if not path.exists() or not path.is_file():
        return DEFAULT_OPTIONS

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read options from %s: %s", path, exc)
        return DEFAULT_OPTIONS

    if not isinstance(payload, dict):
        return DEFAULT_OPTIONS

    try:
        return options_from_mapping(payload)
    except (TypeError, ValueError) as exc:
        logger.warning("Invalid options in %s: %s", path, exc)
        return DEFAULT_OPTIONS


def save_options(options: SynthesisOptions, config_path: Path | None = None) -> tuple[bool, str | None]:
    path = config_path or CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, f"Could not create config folder: {exc}"

    payload = json.dumps(asdict(options), ensure_ascii=True, indent=2, sort_keys=True)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
            handle.flush()
            temp_path = Path(handle.name)

        temp_path.replace(path)
    except OSError as exc:
        if temp_path and temp_path.exists():
            temp_path.unlink(missing_ok=True)
        return False, f"Could not write options: {exc}"

    return True, None
