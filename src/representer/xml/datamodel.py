# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from binascii import a2b_base64 as base64decode
from binascii import b2a_base64 as base64encode
from collections.abc import MutableMapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, ClassVar, Protocol, Self, runtime_checkable

from lxml import etree

if TYPE_CHECKING:
    from .builder import XMLBuilder
    from .serializer import RenderOptions

__all__ = (  # noqa: RUF022
    'XMLSerializable',
    'XMLFragment',
    'DataAdapter',
    'AdapterRegistry',

    'StringAdapter',
    'IntegerAdapter',
    'FloatAdapter',
    'DecimalAdapter',
    'BooleanAdapter',
    'DateAdapter',
    'DatetimeAdapter',
    'Base64BinaryAdapter',
)


# noinspection PyProtectedMember
type ETreeElement = etree._Element  # noqa: SLF001


@runtime_checkable
class XMLSerializable(Protocol):
    """A protocol that describes a value that knows how to render itself as XML"""

    def build_xml(self, builder: 'XMLBuilder', options: 'RenderOptions') -> None:
        """Add the XML representation of the value to the builder"""
        ...


@runtime_checkable
class XMLFragment(Protocol):
    """A protocol that describes a type that converts between itself and an XML fragment"""

    @classmethod
    def from_xml(cls, element: ETreeElement, /) -> Self:
        """Build an instance from its XML element"""
        ...

    def build_xml(self, builder: 'XMLBuilder', options: 'RenderOptions') -> None:
        """Add the XML representation of the instance to the builder"""
        ...


@runtime_checkable
class DataAdapter[T](Protocol):
    """A protocol that describes an adapter between a scalar data type T and the text of an XML leaf"""

    type_name: ClassVar[str]

    @staticmethod
    def xml_parse(value: str, /) -> T:
        """Parse XML text into the data type"""
        ...

    @staticmethod
    def xml_build(value: T, /) -> str:
        """Build XML text from the data type"""
        ...


class AdapterRegistry:
    _adapters: ClassVar[MutableMapping[type, type[DataAdapter]]] = {}
    _names: ClassVar[MutableMapping[str, type[DataAdapter]]] = {}

    @classmethod
    def associate(cls, data_type: type, adapter: type[DataAdapter], *, aliases: tuple[str, ...] = ()) -> None:
        cls._adapters[data_type] = adapter
        for name in (adapter.type_name, *aliases):
            cls._names[name] = adapter

    @classmethod
    def alias(cls, name: str, adapter: type[DataAdapter]) -> None:
        """Recognize an additional type name when reading, without using it when writing"""
        cls._names[name] = adapter

    @classmethod
    def get_adapter(cls, data_type: type) -> type[DataAdapter] | None:
        # walk the MRO so that the most specific registered type wins (bool before int, datetime before date)
        for base in data_type.__mro__:
            adapter = cls._adapters.get(base, None)
            if adapter is not None:
                return adapter
        return None

    @classmethod
    def get_named_adapter(cls, name: str) -> type[DataAdapter] | None:
        return cls._names.get(name, None)


class StringAdapter:
    type_name: ClassVar[str] = 'string'

    @staticmethod
    def xml_parse(value: str) -> str:
        return value

    @staticmethod
    def xml_build(value: str) -> str:
        return value


class IntegerAdapter:
    type_name: ClassVar[str] = 'integer'

    @staticmethod
    def xml_parse(value: str) -> int:
        return int(value)

    @staticmethod
    def xml_build(value: int) -> str:
        return str(value)


class FloatAdapter:
    type_name: ClassVar[str] = 'float'

    @staticmethod
    def xml_parse(value: str) -> float:
        return float(value)

    @staticmethod
    def xml_build(value: float) -> str:
        return repr(value)


class DecimalAdapter:
    type_name: ClassVar[str] = 'decimal'

    @staticmethod
    def xml_parse(value: str) -> Decimal:
        try:
            return Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f'Invalid decimal value: {value!r}') from exc

    @staticmethod
    def xml_build(value: Decimal) -> str:
        return str(value)


class BooleanAdapter:
    type_name: ClassVar[str] = 'boolean'

    @staticmethod
    def xml_parse(value: str) -> bool:
        match value.strip():
            case 'true' | '1':
                return True
            case 'false' | '0':
                return False
            case _:
                raise ValueError(f'Invalid boolean value: {value!r}')

    @staticmethod
    def xml_build(value: bool) -> str:  # noqa: FBT001
        return 'true' if value else 'false'


class DateAdapter:
    type_name: ClassVar[str] = 'date'

    @staticmethod
    def xml_parse(value: str) -> date:
        return date.fromisoformat(value.strip())

    @staticmethod
    def xml_build(value: date) -> str:
        return value.isoformat()


class DatetimeAdapter:
    type_name: ClassVar[str] = 'datetime'

    @staticmethod
    def xml_parse(value: str) -> datetime:
        return datetime.fromisoformat(value.strip())

    @staticmethod
    def xml_build(value: datetime) -> str:
        return value.isoformat()


class Base64BinaryAdapter:
    type_name: ClassVar[str] = 'base64Binary'

    @staticmethod
    def xml_parse(value: str) -> bytes:
        return base64decode(value)

    @staticmethod
    def xml_build(value: bytes) -> str:
        return base64encode(value, newline=False).decode('ascii')


AdapterRegistry.associate(bool, BooleanAdapter)
AdapterRegistry.associate(int, IntegerAdapter)
AdapterRegistry.associate(float, FloatAdapter)
AdapterRegistry.associate(Decimal, DecimalAdapter)
AdapterRegistry.associate(date, DateAdapter)
AdapterRegistry.associate(datetime, DatetimeAdapter, aliases=('dateTime',))
AdapterRegistry.associate(bytes, Base64BinaryAdapter)

# strings are written without a type hint, but documents may still carry one
AdapterRegistry.alias(StringAdapter.type_name, StringAdapter)
AdapterRegistry.alias('symbol', StringAdapter)

