"""Tests for srccombine.text.scanner."""

from __future__ import annotations

import pytest

from srccombine.models import SpanKind
from srccombine.text.scanner import LiteralAwareScanner, scan


def _kinds(source: str) -> list[tuple[SpanKind, str]]:
    return [(span.kind, span.text(source)) for span in scan(source)]


@pytest.mark.parametrize(
    "source",
    [
        "",
        "class A {}",
        'var url = "http://example.com"; // trailing\n',
        "/* multi\nline */ int x;\r\n// c\r\nint y;",
        '@"C:\\temp\\" + "a\\"b" + \'"\' /* done',
        '"unterminated\nnext line',
        "@\"verbatim \"\"quoted\"\" /* */\" tail",
        "a / b * c /",
    ],
)
def test_spans_reconstruct_input(source: str) -> None:
    spans = list(scan(source))
    assert "".join(span.text(source) for span in spans) == source
    position = 0
    for span in spans:
        assert span.start == position
        assert span.end > span.start
        position = span.end
    assert position == len(source)


def test_block_comment_inside_string_is_literal() -> None:
    source = 'var s = "see /* note */ here";'
    assert _kinds(source) == [
        (SpanKind.OTHER, "var s = "),
        (SpanKind.STRING, '"see /* note */ here"'),
        (SpanKind.OTHER, ";"),
    ]


def test_line_comment_stops_before_line_break() -> None:
    source = "int x; // note\nint y;"
    assert _kinds(source) == [
        (SpanKind.OTHER, "int x; "),
        (SpanKind.COMMENT, "// note"),
        (SpanKind.OTHER, "\nint y;"),
    ]


def test_block_comment_is_non_greedy_and_multiline() -> None:
    source = "/* a\n b */x/* c */"
    assert _kinds(source) == [
        (SpanKind.COMMENT, "/* a\n b */"),
        (SpanKind.OTHER, "x"),
        (SpanKind.COMMENT, "/* c */"),
    ]


def test_escaped_quote_does_not_close_string() -> None:
    source = r'"a \" // b" + c'
    assert _kinds(source)[0] == (SpanKind.STRING, r'"a \" // b"')


def test_escaped_backslash_before_quote_closes_string() -> None:
    source = '"dir\\\\" // comment'
    kinds = _kinds(source)
    assert kinds[0] == (SpanKind.STRING, '"dir\\\\"')
    assert kinds[-1] == (SpanKind.COMMENT, "// comment")


def test_verbatim_string_with_doubled_quotes() -> None:
    source = '@"say ""hi"" // not a comment\\" + x'
    kinds = _kinds(source)
    assert kinds[0] == (SpanKind.VERBATIM_STRING, '@"say ""hi"" // not a comment\\"')
    assert kinds[1] == (SpanKind.OTHER, " + x")


def test_verbatim_string_may_span_lines() -> None:
    source = '@"line one\n/* still text */"'
    assert _kinds(source) == [(SpanKind.VERBATIM_STRING, source)]


def test_interpolated_verbatim_prefixes() -> None:
    assert _kinds('@$"{a} // b"')[0][0] is SpanKind.VERBATIM_STRING
    kinds = _kinds('$@"{a} // b"')
    assert kinds[0] == (SpanKind.OTHER, "$")
    assert kinds[1] == (SpanKind.VERBATIM_STRING, '@"{a} // b"')


def test_char_literal_quote_does_not_open_string() -> None:
    source = "if (c == '\"') { } // done"
    kinds = _kinds(source)
    assert (SpanKind.STRING, "'\"'") in kinds
    assert kinds[-1] == (SpanKind.COMMENT, "// done")


def test_quote_inside_comment_does_not_open_string() -> None:
    source = '// it\'s "quoted"\nint x;'
    assert _kinds(source) == [
        (SpanKind.COMMENT, '// it\'s "quoted"'),
        (SpanKind.OTHER, "\nint x;"),
    ]


def test_unterminated_string_ends_at_line_break() -> None:
    scanner = LiteralAwareScanner()
    source = 'x = "open /* not comment\ny = 1; // real'
    spans = scanner.spans(source)
    kinds = [(span.kind, span.text(source)) for span in spans]
    assert kinds[1] == (SpanKind.STRING, '"open /* not comment')
    assert kinds[-1] == (SpanKind.COMMENT, "// real")
    assert scanner.diagnostics.unterminated_strings == 1


def test_unterminated_block_comment_runs_to_end() -> None:
    scanner = LiteralAwareScanner()
    source = "int x; /* never closed\nint y;"
    spans = scanner.spans(source)
    assert spans[-1].kind is SpanKind.COMMENT
    assert spans[-1].text(source) == "/* never closed\nint y;"
    assert scanner.diagnostics.unterminated_block_comments == 1
    assert scanner.diagnostics.total == 1


def test_unterminated_verbatim_string_runs_to_end() -> None:
    scanner = LiteralAwareScanner()
    source = 'x = @"never closed\n// text'
    spans = scanner.spans(source)
    assert spans[-1].kind is SpanKind.VERBATIM_STRING
    assert scanner.diagnostics.unterminated_verbatim_strings == 1


def test_diagnostics_reset_between_scans() -> None:
    scanner = LiteralAwareScanner()
    scanner.spans("/* open")
    assert scanner.diagnostics.unterminated_block_comments == 1
    scanner.spans("int x;")
    assert scanner.diagnostics.total == 0


def test_slash_operators_are_other() -> None:
    source = "a = b / c; d /= 2;"
    assert _kinds(source) == [(SpanKind.OTHER, source)]
