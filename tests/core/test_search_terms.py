"""Search Terms: value-shape classification and term collection."""

from crudify.core.search_terms import MatchKind, SearchTerm, classify, collect_terms


def test_integer_value_is_equality():
    assert classify("age", "30") == SearchTerm("age", MatchKind.EQUALS, 30)


def test_signed_integer_value_is_equality():
    assert classify("delta", "-4").value == -4
    assert classify("delta", "+4").value == 4


def test_text_value_is_contains():
    assert classify("name", "jo") == SearchTerm("name", MatchKind.CONTAINS, "jo")


def test_decimal_and_padded_values_are_contains():
    assert classify("age", "3.5").kind is MatchKind.CONTAINS
    assert classify("age", " 30").kind is MatchKind.CONTAINS


def test_numeric_looking_text_is_still_equality():
    # value shape decides, not the column type
    assert classify("name", "42").kind is MatchKind.EQUALS


def test_empty_value_is_contains():
    assert classify("name", "").kind is MatchKind.CONTAINS


def test_collect_terms_skips_absent_fields_and_keeps_field_order():
    terms = collect_terms(["name", "age", "status"], {"age": "30", "name": "jo", "page": "2"})
    assert [t.field for t in terms] == ["name", "age"]


def test_collect_terms_with_no_fields_configured():
    assert collect_terms([], {"name": "jo"}) == []


def test_integer_too_wide_for_64_bits_is_contains():
    term = classify("age", "99999999999999999999")
    assert term == SearchTerm("age", MatchKind.CONTAINS, "99999999999999999999")


def test_largest_64_bit_integer_is_equality():
    assert classify("age", str(2 ** 63 - 1)).kind is MatchKind.EQUALS
