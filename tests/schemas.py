"""Sample document and destination types shared by the test suite.

Types live at module level so that ``typing.get_type_hints`` can resolve
them, and so the CLI can import them as ``tests.schemas:Page``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from bs4.element import Tag

from soupdecode import (
    Float32,
    HTMLUnmarshaler,
    Int8,
    Selection,
    Selector,
    Uint8,
    Uint16,
    selector,
)

TEST_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title></title>
    <meta charset="utf-8" />
  </head>
  <body>
    <h1>
      <ul id="resources">
        <li class="resource">
          <div class="name">Foo</div>
        </li>
        <li class="resource">
          <div class="name">Bar</div>
        </li>
        <li class="resource">
          <div class="name">Baz</div>
        </li>
        <li class="resource">
          <div class="name">Bang</div>
        </li>
        <li class="resource">
          <div class="name">Zip</div>
        </li>
      </ul>
    </h1>
    <div class="foobar">
      <thing foo="yes">1</thing>
      <foo>true</foo>
      <bar>false</bar>
      <float>1.2345</float>
      <int>-123</int>
      <uint>100</uint>
    </div>
    <nav>
      <a class="link" href="/one">One</a>
      <a class="link" href="/two">Two</a>
    </nav>
    <div class="blurb"><p>Hello <b>world</b></p></div>
  </body>
</html>
"""

NAMES = ["Foo", "Bar", "Baz", "Bang", "Zip"]


@dataclass
class Resource:
    name: str = selector(".name", default="")


@dataclass
class Attr:
    key: str
    value: str


@dataclass
class FooBar(HTMLUnmarshaler):
    attrs: list[Attr] = field(default_factory=list)
    val: int = 0
    unmarshal_was_called: bool = False

    def unmarshal_html(self, nodes: list[Tag]) -> None:
        self.unmarshal_was_called = True
        s = Selection.from_nodes(nodes)
        self.attrs = [
            Attr(key, value)
            for node in s.find(".foobar thing")
            for key, value in Selection.attributes(node)
        ]
        self.val = int(s.find("thing").text())


@dataclass
class Page:
    resources: list[Resource] = selector("#resources .resource", default_factory=list)
    foobar: FooBar = field(default_factory=FooBar)


class WildError(Exception):
    pass


@dataclass
class ErrorFooBar(HTMLUnmarshaler):
    def unmarshal_html(self, nodes: list[Tag]) -> None:
        raise WildError("A wild error appeared")


@dataclass
class FiveResources:
    resources: tuple[Resource, Resource, Resource, Resource, Resource] = selector(
        "#resources .resource", default=()
    )


@dataclass
class OneResource:
    resources: tuple[Resource] = selector(".resource", default=())


@dataclass
class BoolTest:
    foo: bool = selector("foo", default=False)
    bar: bool = selector("bar", default=False)


@dataclass
class Booleans:
    bool_test: BoolTest = selector(".foobar", default_factory=BoolTest)


@dataclass
class NumberTest:
    int_: int = selector("int", default=0)
    float_: Float32 = selector("float", default=0.0)
    uint: Uint16 = selector("uint", default=0)


@dataclass
class Numbers:
    number_test: NumberTest = selector(".foobar", default_factory=NumberTest)


@dataclass
class InvalidLiteral:
    foo: int = selector("foo", default=0)


@dataclass
class OutOfRange:
    negative: Uint8 = selector(".foobar int", default=0)
    small: Int8 = selector(".foobar uint", default=0)


@dataclass
class Link:
    text: str = ""
    href: Annotated[str, Selector(",[href]")] = ""


@dataclass
class Nav:
    links: list[Link] = selector("nav a.link", default_factory=list)
    hrefs: list[str] = selector("nav a,[href]", default_factory=list)
    blurb: str = selector(".blurb,html", default="")
    skipped: str = selector("!ignore", default="untouched")


@dataclass
class Required:
    """No defaults at all; the walker must still be able to allocate it."""

    name: str = selector(".name")
    count: int = selector(".foobar int")


@dataclass
class Holder:
    required: Required | None = None
    optional_name: str | None = selector(".foobar thing", default=None)


@dataclass
class Unsupported:
    mapping: dict[str, str] = selector(".foobar", default_factory=dict)


@dataclass
class Recursive:
    child: Recursive | None = None


@dataclass(frozen=True)
class Headline:
    text: str = selector("h1", default="")


@dataclass
class Article:
    headline: Headline = selector("article", default=Headline())


INVALID_ROOT_SELECTOR = Annotated[list[str], Selector("[[bad")]
