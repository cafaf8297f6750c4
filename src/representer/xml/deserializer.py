# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import inflection
from lxml import etree

from representer.exceptions import MalformedInputError, UnknownCollectionItemTypeError

from .datamodel import AdapterRegistry

if TYPE_CHECKING:
    from representer.model import Collection

__all__ = 'deserialize', 'element_value', 'parse'


logger = logging.getLogger(__name__)


# noinspection PyProtectedMember
type ETreeElement = etree._Element  # noqa: SLF001
type XMLSource = str | bytes | ETreeElement

CONTENT_KEY = '__content__'
RESERVED_ATTRIBUTES = frozenset({'type', 'nil'})

parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, remove_pis=True)


def parse(source: str | bytes) -> ETreeElement:
    try:
        if isinstance(source, str):
            # lxml refuses str input that carries an encoding declaration
            return etree.fromstring(source.encode('utf-8'), parser)
        return etree.fromstring(source, parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedInputError(f'Malformed XML input: {exc!s}') from exc


def attribute_name(tag: str) -> str:
    return tag.replace('-', '_')


def element_value(element: ETreeElement) -> Any:
    """Convert an element into a scalar, a list or a mapping, depending on its shape and type hint"""
    if element.get('nil') == 'true':
        return None
    type_name = element.get('type')
    children = [child for child in element if isinstance(child.tag, str)]
    if type_name == 'array':
        return [element_value(child) for child in children]
    if children:
        return element_mapping(element)
    extra_attributes = {name: value for name, value in element.attrib.items() if name not in RESERVED_ATTRIBUTES}
    if extra_attributes:
        if element.text:
            extra_attributes[CONTENT_KEY] = element.text
        return extra_attributes
    text = element.text or ''
    if type_name is None:
        return text
    adapter = AdapterRegistry.get_named_adapter(type_name)
    if adapter is None:
        logger.warning(f'Unknown type hint {type_name!r} for element {element.tag!r}, keeping it as text')
        return text
    if adapter.type_name != 'string' and not text.strip():
        return None
    try:
        return adapter.xml_parse(text)
    except ValueError as exc:
        raise ValueError(f'Invalid value for element {element.tag!r}: {exc!s}') from exc


def element_mapping(element: ETreeElement, collections: Mapping[str, 'Collection'] | None = None) -> dict[str, Any]:
    """
    Convert the children of element into an attribute map.

    Children that share the same tag are collapsed into a list stored under
    the pluralized name. Children that belong to a declared collection are
    always gathered into a list under the collection name, no matter if
    there are zero, one or more of them, and when the collection names an
    item class each member is built by that class from its element.
    """
    collections = collections or {}
    member_tags = {attribute_name(declaration.tag): declaration for declaration in collections.values()}

    groups: dict[str, list[ETreeElement]] = {}
    for child in element:
        if isinstance(child.tag, str):
            groups.setdefault(attribute_name(child.tag), []).append(child)

    attributes: dict[str, Any] = {}
    for name, elements in groups.items():
        declaration = member_tags.get(name, None)
        if declaration is not None:
            attributes.setdefault(declaration.name, []).extend(collection_members(declaration, elements))
            continue
        declaration = collections.get(name, None)
        if declaration is not None:
            for wrapper in elements:
                attributes.setdefault(declaration.name, []).extend(collection_members(declaration, wrapped_members(declaration, wrapper)))
            continue
        if len(elements) > 1:
            name, value = inflection.pluralize(name), [element_value(item) for item in elements]
        else:
            value = element_value(elements[0])
        if name in attributes:
            # the first one in document order wins
            logger.warning(f'Ignoring <{elements[0].tag}> under <{element.tag}> as its value would replace the existing {name!r} attribute')
        else:
            attributes[name] = value

    for name in collections:
        attributes.setdefault(name, [])

    return attributes


def wrapped_members(declaration: 'Collection', wrapper: ETreeElement) -> list[ETreeElement]:
    """Return the member elements of a collection that was rendered inside a wrapper element"""
    children = [child for child in wrapper if isinstance(child.tag, str)]
    if children or wrapper.get('type') == 'array' or wrapper.get('nil') == 'true' or not (wrapper.text or '').strip():
        return children
    if declaration.item_class is not None:
        raise UnknownCollectionItemTypeError(f'The {declaration.name!r} collection expects {declaration.item_class.__qualname__} fragments, but <{wrapper.tag}> only holds text')
    return [wrapper]


def holds_only_text(element: ETreeElement) -> bool:
    if any(isinstance(child.tag, str) for child in element) or any(name not in RESERVED_ATTRIBUTES for name in element.attrib):
        return False
    return element.get('nil') != 'true' and bool((element.text or '').strip())


def collection_members(declaration: 'Collection', elements: list[ETreeElement]) -> list[Any]:
    item_class = declaration.item_class
    if item_class is None:
        return [element_value(element) for element in elements]
    # models are built from the attribute map of their element, which has no place for text
    if getattr(item_class, '_collections_', None) is not None:
        for element in elements:
            if holds_only_text(element):
                raise UnknownCollectionItemTypeError(f'The {declaration.name!r} collection expects {item_class.__qualname__} models, but <{element.tag}> only holds text')
    return [item_class.from_xml(element) for element in elements]


def deserialize(source: XMLSource, target_class: type | None = None) -> dict[str, Any]:
    """
    Parse an XML document into the attribute map of its root element.

    The target class supplies the collection declarations, if it has any.
    The root tag itself is not checked against the target class.
    """
    root = parse(source) if isinstance(source, str | bytes) else source
    collections: Mapping[str, Collection] = getattr(target_class, '_collections_', None) or {}
    attributes = element_mapping(root, collections)
    if len(root) == 0 and root.text and root.text.strip():
        logger.debug(f'Ignoring text content of the <{root.tag}> root element')
    return attributes
