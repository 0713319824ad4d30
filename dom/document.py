"""호스트 문서 모듈 — 컨테이너/트리거 요소 조회와 요소 생성.

브라우저 DOM 대신 쓰는 최소한의 인메모리 문서 트리다.
셀렉터는 "#id", ".class", 태그 이름 세 가지만 지원한다.
"""

import logging
from typing import Callable

from renderer.canvas import Canvas

logger = logging.getLogger(__name__)


class Event:
    """요소에 전달되는 이벤트."""

    def __init__(self, type: str, target=None):
        self.type = type
        self.target = target
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class Element:
    """문서 트리의 요소."""

    def __init__(self, tag: str, props: dict | None = None):
        self.tag = tag
        self.props = dict(props or {})
        self.children: list[Element] = []
        self.parent: Element | None = None
        self._listeners: dict[str, list[Callable]] = {}

    @property
    def id(self) -> str | None:
        return self.props.get("id")

    @property
    def classes(self) -> list[str]:
        return str(self.props.get("class", "")).split()

    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def add_event_listener(self, type: str, handler: Callable) -> None:
        self._listeners.setdefault(type, []).append(handler)

    def dispatch_event(self, event: Event) -> bool:
        """리스너를 등록 순서대로 호출한다. 기본 동작이 취소되지 않았으면 True."""
        event.target = event.target or self
        for handler in list(self._listeners.get(event.type, [])):
            handler(event)
        return not event.default_prevented

    def click(self) -> bool:
        return self.dispatch_event(Event("click", self))

    def matches(self, selector: str) -> bool:
        if selector.startswith("#"):
            return self.id == selector[1:]
        if selector.startswith("."):
            return selector[1:] in self.classes
        return self.tag == selector

    def iter_descendants(self):
        """깊이 우선으로 하위 요소를 순회한다 (자기 자신 제외)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<{self.tag}{ident}>"


class CanvasElement(Element):
    """캔버스 요소 — Canvas를 2D 컨텍스트로 가진다."""

    def __init__(self, props: dict | None = None):
        super().__init__("canvas", props)
        self._canvas = Canvas(self.props.get("width", 300), self.props.get("height", 150))

    @property
    def width(self) -> int:
        return self._canvas.width

    @property
    def height(self) -> int:
        return self._canvas.height

    def get_context(self, kind: str = "2d") -> Canvas:
        if kind != "2d":
            raise ValueError(f"지원하지 않는 컨텍스트: {kind}")
        return self._canvas

    def to_data_url(self, fmt: str = "png", quality: float = 1.0) -> str:
        return self._canvas.to_data_url(fmt, quality)


def make_element(kind: str, props: dict | None = None) -> Element:
    """요소를 생성한다. 문서에는 붙이지 않은 상태로 반환한다."""
    if kind == "canvas":
        return CanvasElement(props)
    return Element(kind, props)


class Location:
    """문서의 현재 위치. 다운로드 트리거가 href를 바꾼다."""

    def __init__(self, href: str = "about:blank"):
        self.href = href

    def assign(self, url: str) -> None:
        logger.debug("위치 변경: %s", url[:60])
        self.href = url


class Document:
    """요소 트리의 루트."""

    def __init__(self):
        self.body = Element("body")
        self.location = Location()

    @classmethod
    def with_container(cls, selector: str = "#cardmaker") -> "Document":
        """셀렉터에 맞는 컨테이너 div 하나를 가진 문서를 만든다."""
        doc = cls()
        props = {}
        if selector.startswith("#"):
            props["id"] = selector[1:]
        elif selector.startswith("."):
            props["class"] = selector[1:]
        doc.body.append_child(Element("div" if props else selector, props))
        return doc

    def query_selector(self, selector) -> Element | None:
        """셀렉터와 일치하는 첫 요소를 반환한다. 요소를 직접 넘기면 그대로 반환."""
        if isinstance(selector, Element):
            return selector
        if not isinstance(selector, str) or not selector:
            return None
        if self.body.matches(selector):
            return self.body
        for element in self.body.iter_descendants():
            if element.matches(selector):
                return element
        return None
