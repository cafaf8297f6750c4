# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Iterator
from contextlib import contextmanager

from lxml import etree

__all__ = 'XML_DECLARATION', 'XMLBuilder'


# noinspection PyProtectedMember
type ETreeElement = etree._Element  # noqa: SLF001
type Fragment = str | ETreeElement

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class XMLBuilder:
    """
    An accumulating markup builder.

    Elements that are created while no other element is open become top
    level fragments, and elements created inside a nest() block become
    children of the innermost open element. The output is the rendering
    of all the top level fragments in the order they were added, which
    allows multiple independent renders to share one builder.

      builder = XMLBuilder(indent=2)
      with builder.nest('order'):
          builder.tag('article', 'Peanut Butter')
          builder.tag('amount', '1', type='integer')
      builder.target()
    """

    def __init__(self, *, indent: int = 0) -> None:
        if indent < 0:
            raise ValueError('indent must be a non-negative integer')
        self.indent = indent
        self._fragments: list[Fragment] = []
        self._stack: list[ETreeElement] = []

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(indent={self.indent!r}, fragments={len(self._fragments)}, depth={len(self._stack)})'

    @property
    def depth(self) -> int:
        return len(self._stack)

    def instruct(self) -> None:
        self._fragments.append(XML_DECLARATION + '\n' if self.indent else XML_DECLARATION)

    def tag(self, name: str, text: str | None = None, /, **attributes: str) -> ETreeElement:
        element = self._new_element(name, attributes)
        if text is not None:
            element.text = text
        return element

    @contextmanager
    def nest(self, name: str, /, **attributes: str) -> Iterator[ETreeElement]:
        element = self._new_element(name, attributes)
        self._stack.append(element)
        try:
            yield element
        finally:
            self._stack.pop()

    def target(self) -> str:
        return ''.join(self._render(fragment) for fragment in self._fragments)

    def _new_element(self, name: str, attributes: dict[str, str]) -> ETreeElement:
        if self._stack:
            return etree.SubElement(self._stack[-1], name, attributes)
        element = etree.Element(name, attributes)
        self._fragments.append(element)
        return element

    def _render(self, fragment: Fragment) -> str:
        if isinstance(fragment, str):
            return fragment
        if self.indent:
            etree.indent(fragment, space=' ' * self.indent)
            return etree.tostring(fragment, encoding='unicode') + '\n'
        return etree.tostring(fragment, encoding='unicode')
