from fintrack_ai.domain.normalizer import normalize_description, strip_filler_prefixes
from fintrack_ai.domain.similarity import calculate_similarity


def test_normalize_strips_prefix_punctuation_and_whitespace() -> None:
    assert normalize_description("Pembayaran   Listrik PLN!! ") == "listrik pln"
    assert normalize_description("Beli Nasi-Goreng, pedas") == "nasi goreng pedas"


def test_normalize_treats_underscore_as_separator() -> None:
    assert normalize_description("go_food order") == "go food order"


def test_prefixes_are_checked_in_order_once_each() -> None:
    assert strip_filler_prefixes("transfer trx beli pulsa") == "pulsa"
    # "bayar " is checked before "beli ", so the exposed "bayar" stays
    assert strip_filler_prefixes("beli bayar pulsa") == "bayar pulsa"


def test_normalize_empty() -> None:
    assert normalize_description("") == ""
    assert normalize_description(" !!! ") == ""


def test_similarity_bounds() -> None:
    assert calculate_similarity("", "") == 1.0
    assert calculate_similarity("abc", "abc") == 1.0
    assert calculate_similarity("abc", "") == 0.0
    assert calculate_similarity("nasi goreng", "nasi gorengg") >= 0.9


def test_similarity_matches_edit_distance_ratio() -> None:
    # kitten -> sitting: distance 3, longest 7
    assert abs(calculate_similarity("kitten", "sitting") - (1 - 3 / 7)) < 1e-9
