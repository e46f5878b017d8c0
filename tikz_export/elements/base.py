from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from tikz_export.registry.context import ExportContext
    from tikz_export.scene import Group, Node


class Element(ABC):
    """One unit of output markup: an opening line, body lines and a closing line."""

    @property
    def preamble(self) -> str:
        return ""

    @abstractmethod
    def body(self) -> Iterator[str]:
        raise NotImplementedError

    @property
    def postamble(self) -> str:
        return ""


class LeafElement(Element):
    @abstractmethod
    def bind(self, node: "Node", context: "ExportContext") -> None:
        raise NotImplementedError


class GroupElement(Element):
    def __init__(self) -> None:
        self._children: list[Element] = []

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._children)

    def __contains__(self, element: object) -> bool:
        return element in self._children

    def add(self, element: Element) -> None:
        self._children.append(element)

    def remove(self, element: Element) -> bool:
        if element not in self._children:
            return False
        self._children.remove(element)
        return True

    def clear(self) -> None:
        self._children.clear()

    def body(self) -> Iterator[str]:
        for child in self._children:
            yield from iter_lines(child)

    @abstractmethod
    def bind(self, group: "Group", context: "ExportContext") -> None:
        raise NotImplementedError


def iter_lines(element: Element) -> Iterator[str]:
    """Yield the element's lines, skipping an empty preamble or postamble."""
    if element.preamble:
        yield element.preamble
    yield from element.body()
    if element.postamble:
        yield element.postamble
