# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections.abc import Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any, ClassVar, Self, overload

import inflection

from .exceptions import UnknownCollectionItemTypeError
from .xml.builder import XMLBuilder
from .xml.datamodel import XMLFragment
from .xml.deserializer import XMLSource, deserialize
from .xml.serializer import RenderOptions, render_attributes, serialize

__all__ = 'Collection', 'XMLModel', 'from_attributes', 'from_xml', 'to_xml'


type AttributeMap = dict[str, Any]


class Collection:
    """
    Declares a list valued attribute on an XMLModel.

    The members of a collection are rendered as sibling elements directly
    under the model element, each one named after the singular form of the
    attribute name (or the explicitly provided tag). When an item class is
    given, it is used to build each member from its XML element when
    parsing, and it must implement the XMLFragment protocol.

      class Order(XMLModel, name='order'):
          items = Collection(Item)

    The descriptor gives access to the attribute value on model instances.
    """

    name: str | None
    tag: str
    item_class: type[XMLFragment] | None

    def __init__(self, item_class: type | None = None, /, *, tag: str | None = None, **options: object) -> None:
        if item_class is not None and not (isinstance(item_class, type) and issubclass(item_class, XMLFragment)):
            raise UnknownCollectionItemTypeError(f'{item_class!r} cannot be used as a collection item class as it does not implement the XMLFragment protocol')
        self.name = None
        self.tag = tag or ''
        self.item_class = item_class
        self.extra_options = options

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(name={self.name!r}, tag={self.tag!r}, options={self.options!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return (self.name, self.tag, self.options) == (other.name, other.tag, other.options)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.name, self.tag))

    @property
    def options(self) -> dict[str, object]:
        options = dict(self.extra_options)
        if self.item_class is not None:
            options['item_class'] = self.item_class
        return options

    def __set_name__(self, owner: type, name: str) -> None:
        if not issubclass(owner, XMLModel):
            raise TypeError(f'Can only use {self.__class__.__qualname__} descriptors on XMLModel classes')
        if self.name is None:
            self.name = name
            self.tag = self.tag or inflection.singularize(name)
        elif name != self.name:
            raise TypeError(f'cannot assign the same {self.__class__.__name__} descriptor to two different names: {self.name} and {name}')

    @overload
    def __get__(self, instance: None, owner: type['XMLModel']) -> Self: ...

    @overload
    def __get__(self, instance: 'XMLModel', owner: type['XMLModel'] | None = None) -> list[Any]: ...

    def __get__(self, instance: 'XMLModel | None', owner: type['XMLModel'] | None = None) -> Self | list[Any]:
        if instance is None:
            return self
        return instance.attributes.setdefault(self.name, [])

    def __set__(self, instance: 'XMLModel', values: Iterable[Any]) -> None:
        instance.attributes[self.name] = list(values)

    def __delete__(self, instance: 'XMLModel') -> None:
        instance.attributes.pop(self.name, None)


class XMLModel:
    """
    Base class for objects that are represented as XML.

    An XMLModel keeps its state in an attribute map, which is rendered as an
    element named after the model, with one child element per attribute.
    The element name is specified via the name class parameter and defaults
    to the underscored class name:

      class LineItem(XMLModel):             # <line-item>...</line-item>
          ...

      class Order(XMLModel, name='order'):  # <order>...</order>
          items = Collection(Item)

    Collection declarations are inherited by subclasses. A subclass that
    declares additional collections gets its own copy of the declarations
    and never changes the ones of its parent.
    """

    # Public attributes. These can either be overwritten by subclasses, or preferably specified via class parameters.
    _name_: ClassVar[str | None] = None

    # Derived and internal attributes (these should not be overwritten in subclasses)
    _collections_: ClassVar[Mapping[str, Collection]] = MappingProxyType({})

    attributes: AttributeMap

    def __init_subclass__(cls, name: str | None = None, **kw: object) -> None:
        super().__init_subclass__(**kw)

        if name is not None:
            if '_name_' in cls.__dict__ and cls._name_ != name:
                raise TypeError(f'The name specified via class parameter and the "_name_" class attribute are different ({name!r} != {cls._name_!r})')
            cls._name_ = name

        # all the collections on this model (both inherited and locally defined)
        cls._collections_ = MappingProxyType(cls._collections_ | {attr: value for attr, value in cls.__dict__.items() if isinstance(value, Collection)})

    def __init__(self, attributes: Mapping[str, Any] | None = None, /) -> None:
        self.attributes = dict(attributes or {})

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self.attributes!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, XMLModel):
            return type(self) is type(other) and self.attributes == other.attributes
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def model_name(cls) -> str:
        return cls._name_ if cls._name_ is not None else inflection.underscore(cls.__name__)

    @classmethod
    def collections(cls) -> Mapping[str, Collection]:
        return cls._collections_

    @classmethod
    def collection(cls, name: str, item_class: type | None = None, /, *, tag: str | None = None, **options: object) -> Collection:
        """Declare a collection after the class was created"""
        declaration = Collection(item_class, tag=tag, **options)
        declaration.__set_name__(cls, name)
        setattr(cls, name, declaration)
        cls._collections_ = MappingProxyType(cls._collections_ | {name: declaration})
        return declaration

    def attributes_for_xml(self) -> AttributeMap:
        """Return the attribute map to render (override to add, rename or drop attributes)"""
        return self.attributes

    def build_xml(self, builder: XMLBuilder, options: RenderOptions) -> None:
        options = replace(options, root_tag=options.root_tag or self.model_name(), builder=builder)
        render_attributes(builder, self.attributes_for_xml(), options, self._collections_)

    def to_xml(self, *, builder: XMLBuilder | None = None, root_tag: str | None = None, skip_instruct: bool = True, skip_types: bool = False, dasherize: bool = True, indent: int = 2) -> str:
        options = RenderOptions(root_tag=root_tag, skip_instruct=skip_instruct, skip_types=skip_types, dasherize=dasherize, indent=indent, builder=builder)
        return serialize(self, options)

    @classmethod
    def from_xml(cls, source: XMLSource, /) -> Self:
        return cls.from_xml_attributes(deserialize(source, cls))

    @classmethod
    def from_xml_attributes(cls, attributes: Mapping[str, Any]) -> Self:
        return cls.from_attributes(attributes)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> Self:
        return cls(attributes)


def to_xml(instance: XMLModel, **options: Any) -> str:
    return instance.to_xml(**options)


def from_xml(source: XMLSource, target_class: type[XMLModel]) -> AttributeMap:
    return deserialize(source, target_class)


def from_attributes[M: XMLModel](target_class: type[M], attributes: Mapping[str, Any]) -> M:
    return target_class.from_attributes(attributes)
