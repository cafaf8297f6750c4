# SPDX-FileCopyrightText: 2020-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from representer.xml import XML_DECLARATION, XMLBuilder


class TestXMLBuilder:

    def test_compact_output(self) -> None:
        builder = XMLBuilder()
        with builder.nest('order'):
            builder.tag('article', 'Peanut Butter')
            builder.tag('amount', '1', type='integer')
        assert builder.target() == '<order><article>Peanut Butter</article><amount type="integer">1</amount></order>'

    def test_indented_output(self) -> None:
        builder = XMLBuilder(indent=2)
        with builder.nest('hash'), builder.nest('order'):
            builder.tag('article', 'Peanut Butter')
        assert builder.target() == '<hash>\n  <order>\n    <article>Peanut Butter</article>\n  </order>\n</hash>\n'

        builder = XMLBuilder(indent=4)
        with builder.nest('test'):
            builder.tag('name', 'Joe')
        assert builder.target() == '<test>\n    <name>Joe</name>\n</test>\n'

    def test_fragments_are_rendered_in_call_order(self) -> None:
        builder = XMLBuilder()
        builder.instruct()
        builder.tag('first', '1')
        builder.tag('second')
        builder.instruct()
        with builder.nest('third'):
            pass
        assert builder.target() == f'{XML_DECLARATION}<first>1</first><second/>{XML_DECLARATION}<third/>'

    def test_declaration_is_followed_by_newline_when_indenting(self) -> None:
        builder = XMLBuilder(indent=2)
        builder.instruct()
        builder.tag('name', 'Joe')
        assert builder.target() == f'{XML_DECLARATION}\n<name>Joe</name>\n'

    def test_text_and_attributes_are_escaped(self) -> None:
        builder = XMLBuilder()
        builder.tag('name', 'Fish & <Chips>', title='"quoted"')
        assert builder.target() == '<name title="&quot;quoted&quot;">Fish &amp; &lt;Chips&gt;</name>'

    def test_empty_text(self) -> None:
        builder = XMLBuilder()
        builder.tag('name', '')
        builder.tag('note')
        assert builder.target() == '<name></name><note/>'

    def test_depth(self) -> None:
        builder = XMLBuilder()
        assert builder.depth == 0
        with builder.nest('outer'):
            assert builder.depth == 1
            with builder.nest('inner'):
                assert builder.depth == 2
        assert builder.depth == 0

    def test_nesting_is_closed_on_error(self) -> None:
        builder = XMLBuilder()
        with pytest.raises(RuntimeError), builder.nest('outer'):
            raise RuntimeError
        assert builder.depth == 0
        builder.tag('next')
        assert builder.target() == '<outer/><next/>'

    def test_target_can_be_called_repeatedly(self) -> None:
        builder = XMLBuilder(indent=2)
        with builder.nest('test'):
            builder.tag('name', 'Joe')
        assert builder.target() == builder.target()

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError, match=r'indent must be a non-negative integer'):
            XMLBuilder(indent=-1)

        builder = XMLBuilder()
        with pytest.raises(ValueError):  # noqa: PT011
            builder.tag('not a name')
