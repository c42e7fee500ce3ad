"""Tests for the CSV parser: structure, limits, encoding and the formula guard."""
import pytest

from bulkimport.imports.errors import CSVImportError
from bulkimport.imports.parser import ParsedCsv, parse_csv


# ─── Structure ────────────────────────────────────────────────────────────────

def test_parses_header_and_rows_in_order():
    parsed = parse_csv("name,email\nAcme Co,a@x.com\nBeta LLC,b@x.com\n")

    assert parsed.fields == ["name", "email"]
    assert parsed.rows == [
        {"name": "Acme Co", "email": "a@x.com"},
        {"name": "Beta LLC", "email": "b@x.com"},
    ]


def test_quoted_fields_keep_commas_and_unescape_quotes():
    parsed = parse_csv('name,quote\n"Smith, John","Says ""hi"""')

    assert parsed.rows == [{"name": "Smith, John", "quote": 'Says "hi"'}]


def test_header_names_and_cells_are_trimmed():
    parsed = parse_csv("  name ,  email \n  Acme Co ,  a@x.com  ")

    assert parsed.fields == ["name", "email"]
    assert parsed.rows == [{"name": "Acme Co", "email": "a@x.com"}]


def test_crlf_line_endings():
    parsed = parse_csv("name,phone\r\nAcme,555-0100\r\n")

    assert parsed.rows == [{"name": "Acme", "phone": "555-0100"}]


def test_blank_lines_are_dropped_and_not_counted():
    parsed = parse_csv("\n\nname\n\nAcme\n   \nBeta\n\n")

    assert parsed.fields == ["name"]
    assert [row["name"] for row in parsed.rows] == ["Acme", "Beta"]


def test_header_only_yields_no_rows():
    parsed = parse_csv("name,email\n")

    assert parsed == ParsedCsv(fields=["name", "email"], rows=[])


def test_parsing_is_idempotent():
    content = 'name,notes\n"Acme, Inc","Gate code ""4411"""\nBeta,\n'

    assert parse_csv(content) == parse_csv(content)


def test_column_count_mismatch_names_row_and_counts():
    with pytest.raises(CSVImportError) as exc_info:
        parse_csv("name,email\nAcme,a@x.com\nBeta,b@x.com,extra")

    assert exc_info.value.message == "Row 3 has 3 columns but expected 2."


def test_row_numbers_count_non_blank_lines():
    with pytest.raises(CSVImportError, match="Row 3 has 1 columns but expected 2"):
        parse_csv("name,email\n\nAcme,a@x.com\n\nBeta")


def test_unterminated_quote_is_rejected():
    with pytest.raises(CSVImportError, match="Row 2 has an unterminated quoted field"):
        parse_csv('name,notes\nAcme,"never closed')


def test_empty_header_name_is_rejected():
    with pytest.raises(CSVImportError, match="Column 2 has an empty header"):
        parse_csv("name,,email\nAcme,x,a@x.com")


def test_repeated_header_name_is_rejected():
    with pytest.raises(CSVImportError) as exc_info:
        parse_csv("name,email,name\nAcme,a@x.com,Acme Co")

    assert exc_info.value.message == "Column 3 repeats the header 'name'."


def test_header_of_only_separators_is_rejected():
    with pytest.raises(CSVImportError, match="CSV header row is empty"):
        parse_csv(",,\nAcme,x,y")


# ─── Limits ───────────────────────────────────────────────────────────────────

def test_row_limit_allows_exactly_max_rows():
    content = "name\n" + "\n".join(f"Customer {i}" for i in range(3))

    assert len(parse_csv(content, max_rows=3).rows) == 3


def test_row_limit_exceeded_names_the_limit():
    content = "name\n" + "\n".join(f"Customer {i}" for i in range(4))

    with pytest.raises(CSVImportError) as exc_info:
        parse_csv(content, max_rows=3)

    assert "maximum of 3 data rows" in exc_info.value.message


def test_row_limit_is_checked_before_later_rows_are_parsed():
    # The malformed line after the limit is never reached.
    content = "name\nA\nB\n\"unterminated"

    with pytest.raises(CSVImportError, match="maximum of 2 data rows"):
        parse_csv(content, max_rows=2)


def test_column_limit_exceeded():
    with pytest.raises(CSVImportError, match="CSV has 3 columns; the maximum is 2"):
        parse_csv("a,b,c\n1,2,3", max_columns=2)


# ─── Encoding ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("content", ["", "   ", "\n\n  \r\n"])
def test_empty_content_is_rejected(content):
    with pytest.raises(CSVImportError, match="CSV content is empty"):
        parse_csv(content)


def test_non_text_content_is_rejected():
    with pytest.raises(CSVImportError, match="CSV content must be text"):
        parse_csv(12345)


def test_utf8_bytes_are_decoded():
    parsed = parse_csv("name,city\nCafé Olé,Zürich".encode("utf-8"))

    assert parsed.rows == [{"name": "Café Olé", "city": "Zürich"}]


def test_invalid_utf8_bytes_are_rejected():
    with pytest.raises(CSVImportError, match="CSV must be UTF-8 encoded"):
        parse_csv(b"name\n\xff\xfeAcme")


def test_lone_surrogate_in_text_is_rejected():
    with pytest.raises(CSVImportError, match="CSV must be UTF-8 encoded"):
        parse_csv("name\nAcme \ud800")


def test_leading_byte_order_mark_is_ignored():
    parsed = parse_csv("\ufeffname,email\nAcme,a@x.com")

    assert parsed.fields == ["name", "email"]


def test_byte_order_mark_in_bytes_is_ignored():
    parsed = parse_csv("\ufeffname\nAcme".encode("utf-8"))

    assert parsed.fields == ["name"]


# ─── Formula injection guard ──────────────────────────────────────────────────

@pytest.mark.parametrize("cell", ["=2+2", "+cmd|' /C calc'!A0", "-2+3", "@SUM(A1:A9)", "=HYPERLINK(\"x\")"])
def test_formula_like_cells_are_rejected(cell):
    content = 'name,balance\nAcme,"' + cell.replace('"', '""') + '"'

    with pytest.raises(CSVImportError) as exc_info:
        parse_csv(content)

    assert "Row 2, column 'balance'" in exc_info.value.message
    assert "possible formula injection" in exc_info.value.message


@pytest.mark.parametrize("cell", ["-15.5", "+42", "-0.5", "+.75", "-100"])
def test_signed_numbers_pass_through_as_strings(cell):
    parsed = parse_csv(f"name,balance\nAcme,{cell}")

    assert parsed.rows[0]["balance"] == cell


def test_formula_check_applies_after_trimming():
    with pytest.raises(CSVImportError, match="values starting with '='"):
        parse_csv("name,notes\nAcme,   =1+1")


def test_formula_in_header_is_rejected():
    with pytest.raises(CSVImportError, match="Row 1"):
        parse_csv("=cmd,name\n1,Acme")
