# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .__info__ import __version__
from .exceptions import MalformedInputError, UnknownCollectionItemTypeError
from .model import Collection, XMLModel, from_attributes, from_xml, to_xml
from .xml import RenderOptions, UnwrappedCollection, XMLBuilder, XMLFragment, XMLSerializable

__all__ = (  # noqa: RUF022
    '__version__',

    'XMLModel',
    'Collection',
    'UnwrappedCollection',
    'XMLBuilder',
    'RenderOptions',
    'XMLSerializable',
    'XMLFragment',

    'to_xml',
    'from_xml',
    'from_attributes',

    'MalformedInputError',
    'UnknownCollectionItemTypeError',
)
