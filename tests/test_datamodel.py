# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import IntEnum

import pytest

from representer.xml.datamodel import (
    AdapterRegistry,
    Base64BinaryAdapter,
    BooleanAdapter,
    DateAdapter,
    DatetimeAdapter,
    DecimalAdapter,
    FloatAdapter,
    IntegerAdapter,
    StringAdapter,
)


class Color(IntEnum):
    RED = 1


class TestAdapters:

    def test_boolean(self) -> None:
        assert BooleanAdapter.xml_build(True) == 'true'
        assert BooleanAdapter.xml_build(False) == 'false'
        assert BooleanAdapter.xml_parse('true') is True
        assert BooleanAdapter.xml_parse(' 1 ') is True
        assert BooleanAdapter.xml_parse('false') is False
        assert BooleanAdapter.xml_parse('0') is False
        with pytest.raises(ValueError, match=r'Invalid boolean value'):
            BooleanAdapter.xml_parse('yes')

    def test_numbers(self) -> None:
        assert IntegerAdapter.xml_build(-7) == '-7'
        assert IntegerAdapter.xml_parse('-7') == -7
        assert FloatAdapter.xml_build(4.5) == '4.5'
        assert FloatAdapter.xml_parse('4.5') == 4.5
        assert DecimalAdapter.xml_build(Decimal('10.50')) == '10.50'
        assert DecimalAdapter.xml_parse('10.50') == Decimal('10.50')
        with pytest.raises(ValueError, match=r'invalid literal'):
            IntegerAdapter.xml_parse('seven')
        with pytest.raises(ValueError, match=r'Invalid decimal value'):
            DecimalAdapter.xml_parse('ten')

    def test_dates(self) -> None:
        moment = datetime(2024, 5, 17, 12, 30, tzinfo=UTC)
        assert DatetimeAdapter.xml_parse(DatetimeAdapter.xml_build(moment)) == moment
        assert DateAdapter.xml_build(date(2024, 5, 17)) == '2024-05-17'
        assert DateAdapter.xml_parse('2024-05-17') == date(2024, 5, 17)

    def test_binary_and_text(self) -> None:
        assert Base64BinaryAdapter.xml_build(b'beer') == 'YmVlcg=='
        assert Base64BinaryAdapter.xml_parse('YmVlcg==') == b'beer'
        assert StringAdapter.xml_parse(' text ') == ' text '


class TestAdapterRegistry:

    def test_lookup_by_type(self) -> None:
        assert AdapterRegistry.get_adapter(bool) is BooleanAdapter
        assert AdapterRegistry.get_adapter(int) is IntegerAdapter
        assert AdapterRegistry.get_adapter(datetime) is DatetimeAdapter
        assert AdapterRegistry.get_adapter(date) is DateAdapter
        assert AdapterRegistry.get_adapter(Color) is IntegerAdapter
        assert AdapterRegistry.get_adapter(str) is None
        assert AdapterRegistry.get_adapter(object) is None

    def test_lookup_by_name(self) -> None:
        assert AdapterRegistry.get_named_adapter('integer') is IntegerAdapter
        assert AdapterRegistry.get_named_adapter('datetime') is DatetimeAdapter
        assert AdapterRegistry.get_named_adapter('dateTime') is DatetimeAdapter
        assert AdapterRegistry.get_named_adapter('string') is StringAdapter
        assert AdapterRegistry.get_named_adapter('symbol') is StringAdapter
        assert AdapterRegistry.get_named_adapter('yaml') is None
