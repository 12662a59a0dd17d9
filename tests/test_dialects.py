import ast

import pytest

from locatorkit.dialects import SUPPORTED_DIALECTS, render_candidate, render_dialect, render_locator_set, selenium_locator
from locatorkit.errors import UnsupportedDialectError
from locatorkit.locator_generator import synthesize_locators
from locatorkit.models import AncestorEntry, ElementDescriptor, LocatorCandidate


def _candidate(strategy_type: str, value: str, priority: int, **kwargs) -> LocatorCandidate:
    return LocatorCandidate(strategy_type=strategy_type, value=value, priority=priority, **kwargs)  # type: ignore[arg-type]


def _submit_button() -> ElementDescriptor:
    return ElementDescriptor(
        tag="button",
        id="submit-btn",
        visible_text="Submit",
        ancestor_chain=(AncestorEntry(tag="button", id="submit-btn"),),
    )


def test_role_rendering_per_dialect() -> None:
    role = _candidate("role", "button", 1, tag="button", name="Submit", name_source="text")
    assert render_candidate(role, "playwright") == "page.getByRole('button', { name: 'Submit' })"
    assert render_candidate(role, "playwright-python") == "page.get_by_role('button', name='Submit')"
    assert render_candidate(role, "cypress") == "cy.findByRole('button', { name: 'Submit' })"
    assert render_candidate(role, "selenium") == "driver.find_element(By.XPATH, '//button[normalize-space()=\"Submit\"]')"


def test_role_without_name() -> None:
    role = _candidate("role", "textbox", 1, tag="input")
    assert render_candidate(role, "playwright") == "page.getByRole('textbox')"
    assert render_candidate(role, "playwright-python") == "page.get_by_role('textbox')"
    assert render_candidate(role, "selenium") == "driver.find_element(By.TAG_NAME, 'input')"


def test_explicit_role_and_label_name_in_selenium() -> None:
    explicit = _candidate("role", "tab", 1, tag="div", attribute="role", name="Settings", name_source="aria-label")
    assert selenium_locator(explicit) == ("By.XPATH", '//div[@role="tab"][@aria-label="Settings"]')

    labelled = _candidate("role", "textbox", 1, tag="input", name="Email", name_source="label")
    assert selenium_locator(labelled) == ("By.XPATH", '//label[normalize-space()="Email"]/following::input[1]')


def test_test_id_rendering_uses_attribute() -> None:
    default = _candidate("testId", "login", 2, tag="button", attribute="data-testid")
    assert render_candidate(default, "playwright") == "page.getByTestId('login')"
    assert render_candidate(default, "playwright-python") == "page.get_by_test_id('login')"
    assert render_candidate(default, "cypress") == "cy.get('[data-testid=\"login\"]')"

    custom = _candidate("testId", "login", 2, tag="button", attribute="data-cy")
    assert render_candidate(custom, "playwright") == "page.locator('[data-cy=\"login\"]')"
    assert render_candidate(custom, "cypress") == "cy.get('[data-cy=\"login\"]')"
    assert selenium_locator(custom) == ("By.CSS_SELECTOR", '[data-cy="login"]')


def test_text_based_strategies() -> None:
    placeholder = _candidate("placeholder", "Search", 3, tag="input")
    assert render_candidate(placeholder, "playwright") == "page.getByPlaceholder('Search')"
    assert render_candidate(placeholder, "cypress") == "cy.findByPlaceholderText('Search')"
    assert selenium_locator(placeholder) == ("By.CSS_SELECTOR", 'input[placeholder="Search"]')

    text = _candidate("text", "Loading", 4, tag="div")
    assert render_candidate(text, "playwright-python") == "page.get_by_text('Loading')"
    assert render_candidate(text, "cypress") == "cy.contains('Loading')"
    assert selenium_locator(text) == ("By.XPATH", '//div[normalize-space()="Loading"]')

    nested = _candidate("label", "Remember me", 5, tag="input", attribute="nested")
    assert render_candidate(nested, "playwright") == "page.getByLabel('Remember me')"
    assert selenium_locator(nested) == ("By.XPATH", '//label[normalize-space()="Remember me"]//input')

    alt = _candidate("altText", "Logo", 6, tag="img")
    assert render_candidate(alt, "playwright-python") == "page.get_by_alt_text('Logo')"
    assert selenium_locator(alt) == ("By.CSS_SELECTOR", 'img[alt="Logo"]')

    title = _candidate("title", "Help", 7, tag="span")
    assert render_candidate(title, "cypress") == "cy.findByTitle('Help')"
    assert selenium_locator(title) == ("By.CSS_SELECTOR", 'span[title="Help"]')


def test_css_rendering() -> None:
    by_id = _candidate("css", "#submit-btn", 8, tag="button", attribute="id")
    assert render_candidate(by_id, "selenium") == "driver.find_element(By.ID, 'submit-btn')"
    assert render_candidate(by_id, "playwright") == "page.locator('#submit-btn')"

    path = _candidate("css", "#list > li.item", 8, tag="li")
    assert render_candidate(path, "cypress") == "cy.get('#list > li.item')"
    assert render_candidate(path, "selenium") == "driver.find_element(By.CSS_SELECTOR, '#list > li.item')"


def test_escaped_values_are_pasted_unchanged() -> None:
    descriptor = ElementDescriptor(
        tag="button",
        visible_text="It's done",
        ancestor_chain=(AncestorEntry(tag="button"),),
    )
    rendering = render_dialect(synthesize_locators(descriptor), "playwright")
    assert rendering.recommended == "page.getByRole('button', { name: 'It\\'s done' })"
    assert rendering.by_strategy["text"] == "page.getByText('It\\'s done')"


def test_render_dialect_actions() -> None:
    locator_set = synthesize_locators(_submit_button())
    playwright = render_dialect(locator_set, "playwright")
    assert playwright.actions["click"] == "await page.getByRole('button', { name: 'Submit' }).click()"
    assert "fill" not in playwright.actions
    assert playwright.alternatives[0] == playwright.recommended
    assert set(playwright.by_strategy) == {"role", "text", "css", "xpath"}

    selenium = render_dialect(locator_set, "selenium")
    assert selenium.actions["wait_for"] == (
        "WebDriverWait(driver, 10).until(EC.visibility_of_element_located("
        "(By.XPATH, '//button[normalize-space()=\"Submit\"]')))"
    )
    assert selenium.by_strategy["css"] == "driver.find_element(By.ID, 'submit-btn')"


def test_typeable_primary_gets_input_actions() -> None:
    descriptor = ElementDescriptor(
        tag="input",
        attributes={"type": "email"},
        ancestor_chain=(AncestorEntry(tag="input"),),
    )
    renderings = render_locator_set(synthesize_locators(descriptor))
    assert renderings["playwright"].actions["fill"] == "await page.getByRole('textbox').fill('text')"
    assert renderings["playwright-python"].actions["fill"] == "page.get_by_role('textbox').fill('text')"
    assert renderings["cypress"].actions["type"] == "cy.findByRole('textbox').type('text')"
    assert renderings["selenium"].actions["send_keys"] == "driver.find_element(By.TAG_NAME, 'input').send_keys('text')"


def test_unsupported_dialect_fails_before_rendering() -> None:
    locator_set = synthesize_locators(_submit_button())
    with pytest.raises(UnsupportedDialectError) as excinfo:
        render_locator_set(locator_set, ["playwright", "webdriverio"])
    assert excinfo.value.dialect == "webdriverio"
    assert excinfo.value.supported == SUPPORTED_DIALECTS

    with pytest.raises(LookupError):
        render_candidate(locator_set.primary, "puppeteer")


def _host_literals(expression: str) -> list[str]:
    """Evaluate every single-quoted literal in a rendered call, as the host language would."""
    literals: list[str] = []
    index = 0
    while (start := expression.find("'", index)) != -1:
        end = start + 1
        while expression[end] != "'":
            end += 2 if expression[end] == "\\" else 1
        literals.append(ast.literal_eval(expression[start : end + 1]))
        index = end + 1
    return literals


def _text_element(text: str) -> ElementDescriptor:
    return ElementDescriptor(tag="div", visible_text=text, ancestor_chain=(AncestorEntry(tag="div"),))


TRICKY_VALUES = ['say "hi"', "It's", "back\\slash", "It's \"ok\""]


@pytest.mark.parametrize("value", TRICKY_VALUES)
@pytest.mark.parametrize("dialect", ["playwright", "playwright-python", "cypress"])
def test_direct_literals_evaluate_to_raw_value(dialect: str, value: str) -> None:
    text = synthesize_locators(_text_element(value)).candidate("text")
    assert text is not None
    assert _host_literals(render_candidate(text, dialect)) == [value]

    button = ElementDescriptor(tag="button", visible_text=value, ancestor_chain=(AncestorEntry(tag="button"),))
    role = synthesize_locators(button).primary
    assert _host_literals(render_candidate(role, dialect)) == ["button", value]


@pytest.mark.parametrize(
    ("value", "selector"),
    [
        ('say "hi"', '[data-cy="say \\"hi\\""]'),
        ("It's", "[data-cy=\"It's\"]"),
        ("back\\slash", '[data-cy="back\\\\slash"]'),
    ],
)
@pytest.mark.parametrize("dialect", ["playwright", "playwright-python", "cypress", "selenium"])
def test_attribute_selectors_are_quoted_for_css(dialect: str, value: str, selector: str) -> None:
    descriptor = ElementDescriptor(tag="div", attributes={"data-cy": value}, ancestor_chain=(AncestorEntry(tag="div"),))
    test_id = synthesize_locators(descriptor).candidate("testId")
    assert test_id is not None
    assert _host_literals(render_candidate(test_id, dialect)) == [selector]


@pytest.mark.parametrize(
    ("value", "xpath"),
    [
        ('say "hi"', "//div[normalize-space()='say \"hi\"']"),
        ("It's", "//div[normalize-space()=\"It's\"]"),
        ("back\\slash", '//div[normalize-space()="back\\slash"]'),
        ("It's \"ok\"", "//div[normalize-space()=concat(\"It's \", '\"', \"ok\", '\"', \"\")]"),
    ],
)
def test_selenium_xpath_uses_xpath_quoting(value: str, xpath: str) -> None:
    text = synthesize_locators(_text_element(value)).candidate("text")
    assert text is not None
    assert selenium_locator(text) == ("By.XPATH", xpath)
    assert _host_literals(render_candidate(text, "selenium")) == [xpath]


def test_selenium_attribute_forms_escape_css_values() -> None:
    placeholder = _candidate("placeholder", 'a \\"b\\"', 3, tag="input")
    assert selenium_locator(placeholder) == ("By.CSS_SELECTOR", 'input[placeholder="a \\"b\\""]')
    labelled = _candidate("role", "textbox", 1, tag="input", name="It\\'s", name_source="label")
    assert selenium_locator(labelled) == ("By.XPATH", "//label[normalize-space()=\"It's\"]/following::input[1]")


def test_css_candidate_xpath_is_offered_where_supported() -> None:
    descriptor = ElementDescriptor(
        tag="span",
        ancestor_chain=(AncestorEntry(tag="span", sibling_index=3, same_tag_count=3), AncestorEntry(tag="ul", id="list")),
    )
    renderings = render_locator_set(synthesize_locators(descriptor))
    assert renderings["selenium"].by_strategy["xpath"] == "driver.find_element(By.XPATH, '/ul[1]/span[3]')"
    assert renderings["selenium"].alternatives[-1] == renderings["selenium"].by_strategy["xpath"]
    assert renderings["playwright"].by_strategy["xpath"] == "page.locator('xpath=/ul[1]/span[3]')"
    assert renderings["playwright-python"].by_strategy["xpath"] == "page.locator('xpath=/ul[1]/span[3]')"
    assert "xpath" not in renderings["cypress"].by_strategy

    body = render_dialect(synthesize_locators(ElementDescriptor(tag="body")), "selenium")
    assert "xpath" not in body.by_strategy
