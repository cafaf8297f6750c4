# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later


__all__ = 'MalformedInputError', 'UnknownCollectionItemTypeError'


class MalformedInputError(ValueError):
    """Raised when the text to deserialize is not well-formed XML."""


class UnknownCollectionItemTypeError(TypeError):
    """
    Raised when a collection declaration names an item class that cannot
    represent itself as XML.

    An item class must implement the XMLFragment protocol, that is provide
    a ``build_xml`` method and a ``from_xml`` class method. This is a
    configuration error and it is detected when the collection is declared.

    """
