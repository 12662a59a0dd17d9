"""Render abstract candidates into ready-to-paste query calls.

Candidate payloads arrive escaped for a single-quoted host literal and are
pasted unchanged where the host call takes the value directly. Where the host
call takes a selector (CSS attribute match, XPath), the selector is built from
the raw value with that grammar's own quoting and only then escaped for the
host string.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .errors import UnsupportedDialectError
from .models import DialectRendering, LocatorCandidate, LocatorSet
from .selector_rules import escape_css_string, escape_single_quoted, unescape_string, xpath_literal

SUPPORTED_DIALECTS = ("playwright", "playwright-python", "cypress", "selenium")

TYPEABLE_TAGS = {"input", "textarea"}

XPATH_KEY = "xpath"


def _attribute_selector(candidate: LocatorCandidate, default: str = "data-testid") -> str:
    """CSS ``[attr="value"]`` for the raw value, escaped for the host literal."""
    selector = f'[{candidate.attribute or default}="{escape_css_string(candidate.raw_value)}"]'
    return escape_single_quoted(selector)


def _playwright(candidate: LocatorCandidate) -> str:
    kind = candidate.strategy_type
    value = candidate.value
    if kind == "role":
        if candidate.name is not None:
            return f"page.getByRole('{value}', {{ name: '{candidate.name}' }})"
        return f"page.getByRole('{value}')"
    if kind == "testId":
        if candidate.attribute not in (None, "data-testid"):
            return f"page.locator('{_attribute_selector(candidate)}')"
        return f"page.getByTestId('{value}')"
    if kind == "placeholder":
        return f"page.getByPlaceholder('{value}')"
    if kind == "text":
        return f"page.getByText('{value}')"
    if kind == "label":
        return f"page.getByLabel('{value}')"
    if kind == "altText":
        return f"page.getByAltText('{value}')"
    if kind == "title":
        return f"page.getByTitle('{value}')"
    return f"page.locator('{value}')"


def _playwright_python(candidate: LocatorCandidate) -> str:
    kind = candidate.strategy_type
    value = candidate.value
    if kind == "role":
        if candidate.name is not None:
            return f"page.get_by_role('{value}', name='{candidate.name}')"
        return f"page.get_by_role('{value}')"
    if kind == "testId":
        if candidate.attribute not in (None, "data-testid"):
            return f"page.locator('{_attribute_selector(candidate)}')"
        return f"page.get_by_test_id('{value}')"
    if kind == "placeholder":
        return f"page.get_by_placeholder('{value}')"
    if kind == "text":
        return f"page.get_by_text('{value}')"
    if kind == "label":
        return f"page.get_by_label('{value}')"
    if kind == "altText":
        return f"page.get_by_alt_text('{value}')"
    if kind == "title":
        return f"page.get_by_title('{value}')"
    return f"page.locator('{value}')"


def _cypress(candidate: LocatorCandidate) -> str:
    kind = candidate.strategy_type
    value = candidate.value
    if kind == "role":
        if candidate.name is not None:
            return f"cy.findByRole('{value}', {{ name: '{candidate.name}' }})"
        return f"cy.findByRole('{value}')"
    if kind == "testId":
        return f"cy.get('{_attribute_selector(candidate)}')"
    if kind == "placeholder":
        return f"cy.findByPlaceholderText('{value}')"
    if kind == "text":
        return f"cy.contains('{value}')"
    if kind == "label":
        return f"cy.findByLabelText('{value}')"
    if kind == "altText":
        return f"cy.findByAltText('{value}')"
    if kind == "title":
        return f"cy.findByTitle('{value}')"
    return f"cy.get('{value}')"


def selenium_locator(candidate: LocatorCandidate) -> tuple[str, str]:
    """Return the ``(By.X, selector)`` pair Selenium needs for a candidate.

    The selector is unescaped; quote it for the host with ``escape_single_quoted``.
    """
    kind = candidate.strategy_type
    value = candidate.raw_value
    tag = candidate.tag or "*"
    if kind == "role":
        name = candidate.raw_name
        predicates: list[str] = []
        if candidate.attribute == "role":
            predicates.append(f"@role={xpath_literal(value)}")
        if name is not None:
            if candidate.name_source == "text":
                predicates.append(f"normalize-space()={xpath_literal(name)}")
            elif candidate.name_source == "label":
                return "By.XPATH", _label_xpath(tag, name, nested=False)
            elif candidate.name_source == "alt":
                predicates.append(f"@alt={xpath_literal(name)}")
            elif candidate.name_source == "title":
                predicates.append(f"@title={xpath_literal(name)}")
            else:
                predicates.append(f"@aria-label={xpath_literal(name)}")
        if not predicates:
            return "By.TAG_NAME", tag
        return "By.XPATH", f"//{tag}" + "".join(f"[{item}]" for item in predicates)
    if kind == "testId":
        return "By.CSS_SELECTOR", f'[{candidate.attribute or "data-testid"}="{escape_css_string(value)}"]'
    if kind == "placeholder":
        return "By.CSS_SELECTOR", f'{tag}[placeholder="{escape_css_string(value)}"]'
    if kind == "text":
        return "By.XPATH", f"//{tag}[normalize-space()={xpath_literal(value)}]"
    if kind == "label":
        return "By.XPATH", _label_xpath(tag, value, nested=candidate.attribute == "nested")
    if kind == "altText":
        return "By.CSS_SELECTOR", f'{tag}[alt="{escape_css_string(value)}"]'
    if kind == "title":
        return "By.CSS_SELECTOR", f'{tag}[title="{escape_css_string(value)}"]'
    if candidate.attribute == "id":
        return "By.ID", value[1:]
    return "By.CSS_SELECTOR", value


def _label_xpath(tag: str, text: str, *, nested: bool) -> str:
    label = f"//label[normalize-space()={xpath_literal(text)}]"
    if nested:
        return f"{label}//{tag}"
    return f"{label}/following::{tag}[1]"


def _selenium(candidate: LocatorCandidate) -> str:
    by, selector = selenium_locator(candidate)
    return f"driver.find_element({by}, '{escape_single_quoted(selector)}')"


_RENDERERS: dict[str, Callable[[LocatorCandidate], str]] = {
    "playwright": _playwright,
    "playwright-python": _playwright_python,
    "cypress": _cypress,
    "selenium": _selenium,
}

# Cypress has no built-in XPath query.
_XPATH_RENDERERS: dict[str, Callable[[str], str]] = {
    "playwright": lambda xpath: f"page.locator('xpath={xpath}')",
    "playwright-python": lambda xpath: f"page.locator('xpath={xpath}')",
    "selenium": lambda xpath: f"driver.find_element(By.XPATH, '{xpath}')",
}


def _require_dialect(dialect: str) -> Callable[[LocatorCandidate], str]:
    renderer = _RENDERERS.get(dialect)
    if renderer is None:
        raise UnsupportedDialectError(dialect, SUPPORTED_DIALECTS)
    return renderer


def render_candidate(candidate: LocatorCandidate, dialect: str) -> str:
    return _require_dialect(dialect)(candidate)


def render_xpath(candidate: LocatorCandidate, dialect: str) -> str | None:
    """Render the css candidate's absolute XPath, where the dialect can query XPath."""
    _require_dialect(dialect)
    renderer = _XPATH_RENDERERS.get(dialect)
    if renderer is None or not candidate.xpath:
        return None
    return renderer(escape_single_quoted(unescape_string(candidate.xpath)))


def _actions(dialect: str, primary: LocatorCandidate, recommended: str) -> dict[str, str]:
    typeable = primary.tag in TYPEABLE_TAGS
    if dialect == "playwright":
        actions = {
            "click": f"await {recommended}.click()",
            "wait_for": f"await {recommended}.waitFor()",
            "assert_visible": f"await expect({recommended}).toBeVisible()",
        }
        if typeable:
            actions["fill"] = f"await {recommended}.fill('text')"
        return actions
    if dialect == "playwright-python":
        actions = {
            "click": f"{recommended}.click()",
            "wait_for": f"{recommended}.wait_for()",
            "assert_visible": f"expect({recommended}).to_be_visible()",
        }
        if typeable:
            actions["fill"] = f"{recommended}.fill('text')"
        return actions
    if dialect == "cypress":
        actions = {
            "click": f"{recommended}.click()",
            "should_be_visible": f"{recommended}.should('be.visible')",
        }
        if typeable:
            actions["type"] = f"{recommended}.type('text')"
        return actions

    by, selector = selenium_locator(primary)
    actions = {
        "click": f"{recommended}.click()",
        "wait_for": (
            f"WebDriverWait(driver, 10).until(EC.visibility_of_element_located(({by}, '{escape_single_quoted(selector)}')))"
        ),
        "get_text": f"{recommended}.text",
    }
    if typeable:
        actions["send_keys"] = f"{recommended}.send_keys('text')"
    return actions


def render_dialect(locator_set: LocatorSet, dialect: str) -> DialectRendering:
    renderer = _require_dialect(dialect)
    recommended = renderer(locator_set.primary)
    by_strategy = {item.strategy_type: renderer(item) for item in locator_set.alternatives}
    alternatives = [by_strategy[item.strategy_type] for item in locator_set.alternatives]

    css = locator_set.candidate("css")
    xpath = render_xpath(css, dialect) if css is not None else None
    if xpath is not None:
        by_strategy[XPATH_KEY] = xpath
        alternatives.append(xpath)

    return DialectRendering(
        dialect=dialect,
        recommended=recommended,
        alternatives=tuple(alternatives),
        by_strategy=by_strategy,
        actions=_actions(dialect, locator_set.primary, recommended),
    )


def render_locator_set(
    locator_set: LocatorSet,
    dialects: Iterable[str] | None = None,
) -> dict[str, DialectRendering]:
    requested = tuple(dialects) if dialects is not None else SUPPORTED_DIALECTS
    for dialect in requested:
        _require_dialect(dialect)
    return {dialect: render_dialect(locator_set, dialect) for dialect in requested}
