"""
Web Element Flyweights
======================

Web pages built from many elements that share a few element types. The type
carries the tag name, default styles and semantic properties; each element
carries its own content, id, classes and custom attributes.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..errors import InvalidKeyError
from ..keys import FlyweightKey
from ..registry import FlyweightRegistry, SharingReport


@dataclass(frozen=True)
class WebElementKey(FlyweightKey):
    """
    Key for a web element type.

    ``default_styles`` keeps declaration order for rendering; equality and
    hashing go through ``style_set`` so style order does not matter.
    """

    tag_name: str
    default_styles: Tuple[Tuple[str, str], ...] = field(default=(), compare=False)
    semantic_properties: FrozenSet[str] = frozenset()
    style_set: FrozenSet[Tuple[str, str]] = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "style_set", frozenset(self.default_styles))

    @classmethod
    def of(
        cls,
        tag_name: str,
        default_styles: Optional[Mapping[str, str]] = None,
        semantic_properties: Iterable[str] = (),
    ) -> "WebElementKey":
        """Build a key from a style mapping, keeping style order."""
        return cls(
            tag_name,
            tuple((default_styles or {}).items()),
            frozenset(semantic_properties),
        )

    def validate(self) -> None:
        super().validate()
        if not self.tag_name or not self.tag_name.isalnum():
            raise InvalidKeyError(self, f"invalid tag name {self.tag_name!r}")


def paragraph_key() -> WebElementKey:
    return WebElementKey.of(
        "p",
        {"margin": "1em 0", "line-height": "1.6"},
        {"text-content", "block-level"},
    )


def heading_key(level: int) -> WebElementKey:
    if not 1 <= level <= 6:
        raise ValueError(f"heading level must be between 1 and 6, got {level}")
    return WebElementKey.of(
        f"h{level}",
        {"font-weight": "bold", "margin": f"{2.5 - level * 0.3:g}em 0"},
        {"heading", "block-level", "sectioning"},
    )


def button_key() -> WebElementKey:
    return WebElementKey.of(
        "button",
        {
            "padding": "0.5em 1em",
            "border": "1px solid #ccc",
            "background": "#f9f9f9",
            "cursor": "pointer",
        },
        {"interactive", "form-control"},
    )


class WebElementType:
    """Shared element type: tag, default styles and semantic properties."""

    __slots__ = ("_tag_name", "_default_styles", "_semantic_properties")

    def __init__(
        self,
        tag_name: str,
        default_styles: Tuple[Tuple[str, str], ...],
        semantic_properties: FrozenSet[str],
    ):
        self._tag_name = tag_name
        self._default_styles = default_styles
        self._semantic_properties = semantic_properties

    @classmethod
    def from_key(cls, key: WebElementKey) -> "WebElementType":
        return cls(key.tag_name, key.default_styles, key.semantic_properties)

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @property
    def default_styles(self) -> Dict[str, str]:
        return dict(self._default_styles)

    @property
    def semantic_properties(self) -> FrozenSet[str]:
        return self._semantic_properties

    def render(self, content: str, attributes: Mapping[str, str]) -> str:
        merged = {**dict(self._default_styles), **attributes}
        attribute_string = " ".join(f"{k}='{v}'" for k, v in merged.items())
        if attribute_string:
            return f"<{self._tag_name} {attribute_string}>{content}</{self._tag_name}>"
        return f"<{self._tag_name}>{content}</{self._tag_name}>"

    def __repr__(self) -> str:
        return f"WebElementType({self._tag_name!r})"


def web_element_registry(**kwargs) -> FlyweightRegistry[WebElementKey, WebElementType]:
    kwargs.setdefault("name", "web-element-types")
    return FlyweightRegistry(WebElementType.from_key, **kwargs)


@dataclass(frozen=True)
class WebElement:
    element_type: WebElementType
    content: str
    custom_attributes: Tuple[Tuple[str, str], ...] = ()
    id: Optional[str] = None
    classes: Tuple[str, ...] = ()

    def render(self) -> str:
        attributes = dict(self.custom_attributes)
        if self.id is not None:
            attributes["id"] = self.id
        if self.classes:
            attributes["class"] = " ".join(self.classes)
        return self.element_type.render(self.content, attributes)


class WebPage:
    """
    An HTML page whose elements share element-type flyweights.

    Example:
        page = WebPage("Home", web_element_registry())
        page.add_heading(1, "Welcome")
        page.add_paragraph("Hello", classes=["intro"])
        html = page.render()
    """

    def __init__(
        self, title: str, registry: FlyweightRegistry[WebElementKey, WebElementType]
    ):
        self._title = title
        self._registry = registry
        self._elements: List[WebElement] = []

    @property
    def title(self) -> str:
        return self._title

    def _add(
        self,
        key: WebElementKey,
        content: str,
        custom_attributes: Mapping[str, str],
        classes: Iterable[str],
        id: Optional[str],
    ) -> WebElement:
        element = WebElement(
            self._registry.get_or_create(key),
            content,
            tuple(custom_attributes.items()),
            id,
            tuple(classes),
        )
        self._elements.append(element)
        return element

    def add_paragraph(
        self, content: str, classes: Iterable[str] = (), id: Optional[str] = None
    ) -> WebElement:
        return self._add(paragraph_key(), content, {}, classes, id)

    def add_heading(
        self,
        level: int,
        content: str,
        classes: Iterable[str] = (),
        id: Optional[str] = None,
    ) -> WebElement:
        return self._add(heading_key(level), content, {}, classes, id)

    def add_button(
        self,
        text: str,
        on_click: str,
        classes: Iterable[str] = (),
        id: Optional[str] = None,
    ) -> WebElement:
        return self._add(button_key(), text, {"onclick": on_click}, classes, id)

    def render(self) -> str:
        body = "\n".join(f"  {element.render()}" for element in self._elements)
        return "\n".join(
            [
                "<!DOCTYPE html>",
                "<html>",
                f"<head><title>{self._title}</title></head>",
                "<body>",
                body,
                "</body>",
                "</html>",
            ]
        )

    def element_count(self) -> int:
        return len(self._elements)

    def element_type_count(self) -> int:
        return self._registry.count()

    def report(self) -> SharingReport:
        return self._registry.report(self.element_count())

    def optimization_stats(self) -> str:
        report = self.report()
        return (
            f"Page '{self._title}': {report.instances} elements using "
            f"{report.flyweights} types. "
            f"Flyweight efficiency: {report.saved} objects saved"
        )
