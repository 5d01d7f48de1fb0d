"""
================================================================================
Locator
================================================================================

Immutable element locators with ordered fallback alternatives.

A Locator names one lookup strategy plus zero or more alternatives. Resolution
walks the strategies in declaration order (own strategy first, then each
alternative depth-first) and returns the first non-empty match set, so a
button labelled "Get Started" in one build and "Register" in another is
written once:

    >>> hero_cta = Locator.by_text("Get Started", tag="a") | Locator.by_text("Register", tag="a")
    >>> element = hero_cta.require(session)

Strategy Priority (recommended):
    1. attribute-equals (data-testid, name)
    2. css
    3. tag-name
    4. text-contains

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, List, Optional, Protocol, Tuple

from loguru import logger

from .errors import LocatorNotFound


class Strategy(str, Enum):
    """Supported lookup strategies."""

    ATTRIBUTE_EQUALS = "attribute-equals"
    TAG_NAME = "tag-name"
    TEXT_CONTAINS = "text-contains"
    CSS = "css"


class ElementSource(Protocol):
    """Anything that can run a single-strategy lookup (a Session)."""

    def find_elements(self, locator: "Locator") -> List[Any]:
        ...


@dataclass(frozen=True)
class Locator:
    """
    How to find elements on the current page.

    Attributes:
        strategy: Lookup strategy
        value: Selector, tag name, attribute value or text fragment
        attribute: Attribute name (ATTRIBUTE_EQUALS only)
        tag: Tag scope for TEXT_CONTAINS ("*" matches any tag)
        alternatives: Fallback locators, tried in order
    """

    strategy: Strategy
    value: str
    attribute: Optional[str] = None
    tag: str = "*"
    alternatives: Tuple["Locator", ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", Strategy(self.strategy))
        if not self.value:
            raise ValueError("Locator value must be a non-empty string")
        if self.strategy is Strategy.ATTRIBUTE_EQUALS and not self.attribute:
            raise ValueError("attribute-equals locators need an attribute name")

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def by_attribute(cls, attribute: str, value: str) -> "Locator":
        return cls(Strategy.ATTRIBUTE_EQUALS, value, attribute=attribute)

    @classmethod
    def by_name(cls, value: str) -> "Locator":
        return cls.by_attribute("name", value)

    @classmethod
    def by_test_id(cls, value: str) -> "Locator":
        return cls.by_attribute("data-testid", value)

    @classmethod
    def by_tag(cls, tag: str) -> "Locator":
        return cls(Strategy.TAG_NAME, tag)

    @classmethod
    def by_text(cls, text: str, tag: str = "*") -> "Locator":
        return cls(Strategy.TEXT_CONTAINS, text, tag=tag)

    @classmethod
    def by_css(cls, selector: str) -> "Locator":
        return cls(Strategy.CSS, selector)

    # =========================================================================
    # Composition
    # =========================================================================

    def or_(self, *others: "Locator") -> "Locator":
        """Return a new locator that falls back to `others` in order."""
        return replace(self, alternatives=self.alternatives + tuple(others))

    def __or__(self, other: "Locator") -> "Locator":
        if not isinstance(other, Locator):
            return NotImplemented
        return self.or_(other)

    def primary(self) -> "Locator":
        """This locator's own strategy, without alternatives."""
        if not self.alternatives:
            return self
        return replace(self, alternatives=())

    def strategies(self) -> Iterator["Locator"]:
        """Single-strategy locators in resolution order."""
        yield self.primary()
        for alternative in self.alternatives:
            yield from alternative.strategies()

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, state: ElementSource) -> List[Any]:
        """
        Find matching elements.

        Returns the match set of the first strategy that matches anything,
        or an empty list. A closed session raises SessionClosed.
        """
        matched, _ = self._resolve_with_index(state)
        return matched

    def resolve_first(self, state: ElementSource) -> Optional[Any]:
        """First matching element, or None."""
        matched = self.resolve(state)
        return matched[0] if matched else None

    def require(self, state: ElementSource) -> Any:
        """
        One-shot lookup of a single element.

        Raises:
            LocatorNotFound: When every alternative is empty
        """
        matched, index = self._resolve_with_index(state)
        if not matched:
            logger.error(f"❌ All locators failed for: {self}")
            raise LocatorNotFound(self)
        if index > 0:
            used = list(self.strategies())[index]
            logger.warning(
                f"⚠️ Locator '{self.primary().describe()}' used fallback #{index}: "
                f"{used.describe()}"
            )
        return matched[0]

    def _resolve_with_index(self, state: ElementSource) -> Tuple[List[Any], int]:
        for index, single in enumerate(self.strategies()):
            found = list(state.find_elements(single))
            if found:
                return found, index
        return [], -1

    # =========================================================================
    # Reporting
    # =========================================================================

    def describe(self) -> str:
        """Human-readable form of this locator's own strategy."""
        if self.strategy is Strategy.ATTRIBUTE_EQUALS:
            return f"[{self.attribute}={self.value!r}]"
        if self.strategy is Strategy.TAG_NAME:
            return f"<{self.value}>"
        if self.strategy is Strategy.TEXT_CONTAINS:
            scope = "" if self.tag == "*" else f"{self.tag} "
            return f"{scope}text~{self.value!r}"
        return f"css={self.value}"

    def __str__(self) -> str:
        return " | ".join(single.describe() for single in self.strategies())


__all__ = [
    "Locator",
    "Strategy",
    "ElementSource",
]
