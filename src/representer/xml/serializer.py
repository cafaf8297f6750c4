# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Self, overload

import inflection

from .builder import XMLBuilder
from .datamodel import AdapterRegistry, XMLSerializable

if TYPE_CHECKING:
    from representer.model import Collection

__all__ = 'RenderOptions', 'UnwrappedCollection', 'render_attributes', 'render_value', 'serialize'


logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class RenderOptions:
    root_tag: str | None = None
    skip_instruct: bool = False
    skip_types: bool = False
    dasherize: bool = True
    indent: int = 2  # only used when a new builder is created
    builder: XMLBuilder | None = field(default=None, compare=False)

    def xml_name(self, name: object) -> str:
        return inflection.dasherize(str(name)) if self.dasherize else str(name)

    def new_builder(self) -> XMLBuilder:
        return self.builder if self.builder is not None else XMLBuilder(indent=self.indent)


class UnwrappedCollection[T]:  # noqa: PLW1641
    """
    A sequence that renders its items back to back, without an enclosing tag.

    Rendered on its own, every item becomes an independent top level fragment
    (each preceded by its own XML declaration unless skip_instruct is set).
    Rendered as the value of a mapping key, every item becomes an element
    named after that key.
    """

    __slots__ = '_items',  # noqa: COM818

    def __init__(self, items: Iterable[T] = (), /) -> None:
        self._items = list(items)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self._items!r})'

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, key: int) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> list[T]: ...

    def __getitem__(self, key: int | slice) -> T | list[T]:
        return self._items[key]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnwrappedCollection):
            return self._items == other._items
        else:  # noqa: RET505
            return self._items == other

    def build_xml(self, builder: XMLBuilder, options: RenderOptions) -> None:
        for item in self._items:
            render_document(builder, item, options)

    def to_xml(self, *, builder: XMLBuilder | None = None, root_tag: str | None = None, skip_instruct: bool = False, skip_types: bool = False, dasherize: bool = True, indent: int = 0) -> str:
        options = RenderOptions(root_tag=root_tag, skip_instruct=skip_instruct, skip_types=skip_types, dasherize=dasherize, indent=indent, builder=builder)
        return serialize(self, options)

    @classmethod
    def of(cls, *items: T) -> Self:
        return cls(items)


def render_value(builder: XMLBuilder, tag: str, value: Any, options: RenderOptions) -> None:
    """Add value to the builder as an element named tag"""
    match value:
        case XMLSerializable():
            value.build_xml(builder, replace(options, root_tag=tag, skip_instruct=True))
        case Mapping():
            with builder.nest(tag):
                render_mapping(builder, value, options)
        case list() | tuple():
            member_tag = inflection.singularize(tag)
            with builder.nest(tag, **({} if options.skip_types else {'type': 'array'})):
                for item in value:
                    render_value(builder, member_tag, item, options)
        case None:
            builder.tag(tag, nil='true')
        case str():
            builder.tag(tag, value)
        case _:
            adapter = AdapterRegistry.get_adapter(type(value))
            if adapter is None:
                logger.debug(f'No type adapter for {type(value).__qualname__}, rendering <{tag}> as text')
                builder.tag(tag, str(value))
            elif options.skip_types:
                builder.tag(tag, adapter.xml_build(value))
            else:
                builder.tag(tag, adapter.xml_build(value), type=adapter.type_name)


def render_mapping(builder: XMLBuilder, mapping: Mapping[Any, Any], options: RenderOptions, collections: Mapping[str, 'Collection'] | None = None) -> None:
    """Add one element per mapping entry to the element that is currently open in the builder"""
    collections = collections or {}
    for key, value in mapping.items():
        declaration = collections.get(str(key), None)
        if declaration is not None and isinstance(value, list | tuple | UnwrappedCollection):
            # a declared collection is rendered as sibling elements under the parent, not as a wrapped list
            member_tag = options.xml_name(declaration.tag)
            for item in value:
                render_value(builder, member_tag, item, options)
        else:
            render_value(builder, options.xml_name(key), value, options)


def render_attributes(builder: XMLBuilder, attributes: Mapping[Any, Any], options: RenderOptions, collections: Mapping[str, 'Collection'] | None = None) -> None:
    """Add an attribute map to the builder as a document rooted at options.root_tag"""
    if not options.skip_instruct:
        builder.instruct()
    with builder.nest(options.xml_name(options.root_tag or 'hash')):
        render_mapping(builder, attributes, options, collections)


def render_document(builder: XMLBuilder, value: Any, options: RenderOptions) -> None:
    """Add value to the builder as a top level fragment"""
    match value:
        case XMLSerializable():
            value.build_xml(builder, options)
        case Mapping():
            render_attributes(builder, value, options)
        case list() | tuple():
            if not options.skip_instruct:
                builder.instruct()
            render_value(builder, options.xml_name(options.root_tag or 'objects'), value, options)
        case _:
            if not options.skip_instruct:
                builder.instruct()
            render_value(builder, options.xml_name(options.root_tag or 'hash'), value, options)


def serialize(value: Any, options: RenderOptions | None = None, *, collections: Mapping[str, 'Collection'] | None = None) -> str:
    """
    Render value as XML and return the builder's accumulated output.

    The value can be an attribute map, an UnwrappedCollection, an object that
    implements the XMLSerializable protocol, a sequence or a scalar. When a
    builder is provided in the options, the output is added to it and the
    returned text includes everything the builder accumulated so far.

    The collections map is only used when value is an attribute map, and it
    names the keys that must be rendered as unwrapped sibling elements.
    """
    options = options or RenderOptions()
    builder = options.new_builder()
    if collections and isinstance(value, Mapping):
        render_attributes(builder, value, options, collections)
    else:
        render_document(builder, value, options)
    return builder.target()
