from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from math import log2
import re

SAFE_ID_PATTERN = re.compile(r"^[A-Za-z][\w-]*$")

TEXT_CONTENT_LIMIT = 200
ELLIPSIS = "..."

_ESCAPED_CHAR = re.compile(r"\\(.)", re.DOTALL)

# Ids emitted by component libraries and bundlers rather than written by hand.
_FRAMEWORK_ID = re.compile(
    r"(^|[-_:])(mui|css|ng|react|vue|ember|svelte|j_?idt|radix|headlessui)([-_:]|\d|$)|^:r[0-9a-z]+:$",
    re.IGNORECASE,
)
_HEX_RUN = re.compile(r"[a-f0-9]{10,}|^[a-f0-9]{8,}$", re.IGNORECASE)
_UUID = re.compile(r"[a-f0-9]{8}(-[a-f0-9]{4}){3}-[a-f0-9]{12}", re.IGNORECASE)
_NUMERIC_SUFFIX = re.compile(r"[_:-]\d{3,}$")
_LONG_NUMBER = re.compile(r"\d{4,}")


@dataclass(frozen=True, slots=True)
class IdStability:
    value: str
    generated: bool
    entropy: float
    digit_ratio: float
    reasons: tuple[str, ...]


def normalize_space(value: str | None, limit: int | None = None) -> str:
    if not value:
        return ""
    compact = re.sub(r"\s+", " ", str(value)).strip()
    if limit is not None:
        return compact[:limit]
    return compact


def cap_text(value: str | None, limit: int = TEXT_CONTENT_LIMIT) -> str:
    compact = normalize_space(value)
    if len(compact) <= limit:
        return compact
    return compact[:limit] + ELLIPSIS


def escape_string(value: str) -> str:
    """Escape backslashes and both quote styles for a quoted literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'").replace('"', '\\"')


def escape_single_quoted(value: str) -> str:
    """Escape for a single-quoted host literal, leaving double quotes readable."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def unescape_string(value: str) -> str:
    """Invert :func:`escape_string`."""
    return _ESCAPED_CHAR.sub(r"\1", value)


def escape_css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def xpath_literal(value: str) -> str:
    """Quote ``value`` for XPath 1.0, which has no escape sequences."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    pieces = ", '\"', ".join(f'"{piece}"' for piece in value.split('"'))
    return f"concat({pieces})"


def escape_css_identifier(value: str) -> str:
    escaped: list[str] = []
    for index, char in enumerate(value):
        if char.isalnum() or char in ("-", "_") or ord(char) > 127:
            if index == 0 and char.isdigit():
                escaped.append(f"\\{ord(char):x} ")
            else:
                escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def is_safe_id(value: str | None) -> bool:
    if not value:
        return False
    return SAFE_ID_PATTERN.match(value) is not None


def _entropy(text: str) -> float:
    if not text:
        return 0.0
    return -sum((n / len(text)) * log2(n / len(text)) for n in Counter(text).values())


def analyze_id_stability(value: str) -> IdStability:
    """Flag ids that look machine-generated and are likely to change between builds."""
    text = normalize_space(value, limit=200)
    entropy = _entropy(text)
    digits = sum(char.isdigit() for char in text) / len(text) if text else 0.0

    checks = (
        ("digit-ratio>40%", digits > 0.4),
        ("high-entropy", entropy >= 4.2 and len(text) >= 8),
        ("framework-token", _FRAMEWORK_ID.search(text) is not None),
        ("hash-like", _HEX_RUN.search(text) is not None or _UUID.search(text) is not None),
        ("numeric-drift-suffix", _NUMERIC_SUFFIX.search(text) is not None),
        ("long-number", _LONG_NUMBER.search(text) is not None),
    )
    reasons = tuple(reason for reason, hit in checks if hit)
    return IdStability(
        value=text,
        generated=bool(reasons),
        entropy=round(entropy, 4),
        digit_ratio=round(digits, 4),
        reasons=reasons,
    )


def is_anchor_id(value: str | None, *, strict: bool = False) -> bool:
    """Decide whether an id may terminate a CSS path.

    The default is the lexical check only, so framework ids such as
    ``headlessui-menu-button-1`` still anchor. ``strict`` also rejects ids the
    stability analysis flags as generated.
    """
    if not is_safe_id(value):
        return False
    if strict and analyze_id_stability(value or "").generated:
        return False
    return True
