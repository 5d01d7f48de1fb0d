import pytest

from acceptance.ui_testing.framework.errors import LocatorNotFound
from acceptance.ui_testing.framework.locator import Locator, Strategy

from .fakes import FakeElement


def test_factories_set_strategy_and_value():
    assert Locator.by_name("email") == Locator(Strategy.ATTRIBUTE_EQUALS, "email", attribute="name")
    assert Locator.by_test_id("submit").attribute == "data-testid"
    assert Locator.by_tag("h1").strategy is Strategy.TAG_NAME
    assert Locator.by_text("Login", tag="a").tag == "a"
    assert Locator.by_css("#email").strategy is Strategy.CSS


def test_strategy_accepts_string_value():
    locator = Locator("css", "#email")
    assert locator.strategy is Strategy.CSS


@pytest.mark.parametrize(
    "kwargs",
    [
        {"strategy": Strategy.CSS, "value": ""},
        {"strategy": Strategy.ATTRIBUTE_EQUALS, "value": "email"},
    ],
)
def test_invalid_locators_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Locator(**kwargs)


def test_alternatives_are_immutable_additions():
    primary = Locator.by_css("#email")
    combined = primary | Locator.by_name("email")

    assert primary.alternatives == ()
    assert combined.primary() == primary
    assert [single.describe() for single in combined.strategies()] == [
        "css=#email",
        "[name='email']",
    ]


def test_strategies_flatten_nested_alternatives_in_order():
    nested = Locator.by_css("a") | (Locator.by_css("b") | Locator.by_css("c"))
    nested = nested.or_(Locator.by_css("d"))

    assert [single.value for single in nested.strategies()] == ["a", "b", "c", "d"]


def test_resolve_returns_first_non_empty_match_set(page):
    first = FakeElement("first")
    second = FakeElement("second")
    page.place(Locator.by_text("Register", tag="a"), first, second)
    cta = Locator.by_text("Get Started", tag="a") | Locator.by_text("Register", tag="a")

    assert cta.resolve(page) == [first, second]
    assert cta.resolve_first(page) is first


def test_resolve_stops_at_first_matching_strategy(page):
    page.place(Locator.by_css("#email"), FakeElement("email"))
    locator = Locator.by_css("#email") | Locator.by_name("email")

    locator.resolve(page)

    assert page.probes == 1


def test_resolve_empty_when_nothing_matches(page):
    locator = Locator.by_css("#missing") | Locator.by_name("missing")
    assert locator.resolve(page) == []
    assert locator.resolve_first(page) is None


def test_require_raises_with_locator_attached(page):
    locator = Locator.by_css("#missing")

    with pytest.raises(LocatorNotFound) as exc_info:
        locator.require(page)

    assert exc_info.value.locator is locator
    assert "css=#missing" in str(exc_info.value)


def test_require_uses_fallback(page):
    element = FakeElement("password")
    page.place(Locator.by_name("password"), element)
    locator = Locator.by_css("#password") | Locator.by_name("password")

    assert locator.require(page) is element


def test_str_lists_every_strategy():
    locator = Locator.by_text("Sign Up", tag="a") | Locator.by_tag("button")
    assert str(locator) == "a text~'Sign Up' | <button>"
