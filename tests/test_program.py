"""
Tests for the program assembler.

Covers line splitting, blank-line handling, preserved text, error
propagation with line numbers and the render/re-parse round trip.
"""
from __future__ import annotations

import logging
import textwrap

import pytest

from ncparse.core import (
    Comment, LexerError, Percent, Program, UnknownAddressLetterError,
    parse_file, parse_program, parse_program_preserving_text, parse_string,
    word_double, word_int,
)

SAMPLE = textwrap.dedent("""\
    %
    O1000 (POCKET)
    N10 G21 G90 G17
    N20 T1 M6

    N30 G0 X0.0 Y0.0 Z5.0
    /N40 M8
    N50 G1 Z-1.5 F150.
    N60 G2 X10 Y0 I5 J0 [half circle]
    N70 G0 Z5 (retract (safe))
    N80 M30
    %
""")


class TestParseProgram:
    def test_block_count(self):
        program = parse_program(SAMPLE)
        assert program.num_blocks() == 11

    def test_blocks_in_order(self):
        program = parse_program(SAMPLE)
        assert list(program[0]) == [Percent()]
        assert list(program[1]) == [word_int("O", 1000), Comment("(", ")", "POCKET")]
        assert program[2].get_line_number() == 10
        assert list(program[-1]) == [Percent()]

    def test_deleted_block(self):
        block = parse_program(SAMPLE)[5]
        assert block.is_deleted()
        assert block.get_line_number() == 40
        assert list(block) == [word_int("M", 8)]

    def test_nested_comment_in_program(self):
        block = parse_program(SAMPLE)[8]
        assert list(block)[-1] == Comment("(", ")", "retract (safe)")

    def test_feed_with_trailing_dot(self):
        block = parse_program(SAMPLE)[6]
        assert list(block) == [word_int("G", 1), word_double("Z", -1.5), word_double("F", 150)]

    @pytest.mark.parametrize("blank", [0, 1, 4])
    def test_blank_lines_never_produce_blocks(self, blank):
        lines = ["G0 X1", "G1 Y2", "M30"]
        text = ("\n" * (blank + 1)).join(lines) + "\n" * blank
        assert len(parse_program(text)) == len(lines)

    def test_whitespace_line_is_an_empty_block(self):
        program = parse_program("G0\n  \nM30")
        assert len(program) == 3
        assert len(program[1]) == 0

    def test_crlf_input(self):
        program = parse_program("G0 X1\r\nM30\r\n")
        assert list(program[0]) == [word_int("G", 0), word_double("X", 1)]
        assert len(program) == 2

    def test_empty_text(self):
        assert parse_program("") == Program()

    def test_no_text_kept_by_default(self):
        assert all(block.debug_text is None for block in parse_program(SAMPLE))


class TestPreservingText:
    def test_debug_text_is_canonical_rendering(self):
        program = parse_program_preserving_text("N5   G01  X1.50\n%\n")
        assert program[0].debug_text == "N5 G1 X1.5 "
        assert program[1].debug_text == "% "

    def test_equal_to_plain_parse(self):
        assert parse_program_preserving_text(SAMPLE) == parse_program(SAMPLE)

    def test_parse_string_flag(self):
        assert parse_string("G0", preserve_text=True)[0].debug_text == "G0 "
        assert parse_string("G0")[0].debug_text is None


class TestErrors:
    def test_lexer_error_carries_line(self):
        with pytest.raises(LexerError) as info:
            parse_program("G0\n\nG1 X1 )\n")
        assert info.value.line == 3
        assert info.value.column == 7

    def test_parser_error_carries_line(self):
        with pytest.raises(UnknownAddressLetterError) as info:
            parse_program("G0\nG1 #5\n")
        assert info.value.line == 2

    def test_failure_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="ncparse.core.program"):
            with pytest.raises(UnknownAddressLetterError):
                parse_program("@1")
        assert "Failed to parse line 1" in caplog.text


class TestRoundTrip:
    @pytest.mark.parametrize("text", [
        SAMPLE,
        "G0 X0.0 Y0.0 Z0.0\n",
        "N1 G1 X0.1 Y-0.0000001 Z123456.789\n",
        "g1 x1 (a (b) c) [d [e]] X Y1\n",
    ])
    def test_render_then_reparse(self, text):
        program = parse_program(text)
        again = parse_program(program.render())
        assert [list(b) for b in again] == [list(b) for b in program]
        assert [b.line_number for b in again] == [b.line_number for b in program]


class TestParseFile:
    def test_parse_file(self, tmp_path):
        path = tmp_path / "pocket.nc"
        path.write_text(SAMPLE, encoding="utf-8")
        assert parse_file(path) == parse_program(SAMPLE)

    def test_parse_file_preserving_text(self, tmp_path):
        path = tmp_path / "one.nc"
        path.write_text("G0 X1\n", encoding="utf-8")
        assert parse_file(str(path), preserve_text=True)[0].debug_text == "G0 X1 "
