# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .builder import XML_DECLARATION, XMLBuilder
from .datamodel import AdapterRegistry, DataAdapter, XMLFragment, XMLSerializable
from .deserializer import deserialize, element_value, parse
from .serializer import RenderOptions, UnwrappedCollection, serialize

__all__ = (  # noqa: RUF022
    'XMLBuilder',
    'XML_DECLARATION',

    'RenderOptions',
    'UnwrappedCollection',
    'serialize',

    'deserialize',
    'element_value',
    'parse',

    'AdapterRegistry',
    'DataAdapter',
    'XMLFragment',
    'XMLSerializable',
)
