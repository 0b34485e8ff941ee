import pytest

from fintrack_ai.domain.rules import (
    CATEGORY_RULES,
    clean_model_output,
    icon_for_category,
    is_income_related,
    is_unclear_category,
    is_utility_related,
    map_category_name,
    match_category_rule,
    shortcut_category,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Tahu", "Makanan"),
        ("Cemilan", "Jajan"),
        ("Hutang", "Hutang"),
        ("Cicilan", "Hutang"),
        ("Bayar hutang", "Pendapatan"),
        ("Listrik", "Utilitas"),
        ("Gaji", "Pendapatan"),
        ("Uti", "Lain-lain"),
        ("Sembako", "Sembako"),
        ("Perawatan Pribadi", "Perawatan Pribadi"),
        ("Bensin", "Transportasi"),
        ("Sepatu", "Belanja"),
        ("Xyz", "Lain-lain"),
    ],
)
def test_map_category_name(raw: str, expected: str) -> None:
    assert map_category_name(raw) == expected


def test_rules_are_evaluated_in_declared_order() -> None:
    labels = [rule.label for rule in CATEGORY_RULES]
    assert labels.index("indonesian-food") < labels.index("jajan") < labels.index("debt")
    # "kerupuk" is both a food term and a snack; food wins
    assert match_category_rule("Kerupuk").label == "indonesian-food"


def test_uti_is_not_a_utility() -> None:
    assert is_utility_related("uti") is False
    assert is_utility_related("kado uti") is False
    assert is_utility_related("tagihan listrik") is True


def test_jajan_is_never_income() -> None:
    assert is_income_related("Gaji") is True
    assert is_income_related("jajan gaji") is False


def test_clean_model_output_strips_quotes_and_capitalizes() -> None:
    assert clean_model_output(' "transportasi" ') == "Transportasi"


def test_clean_model_output_extracts_quoted_name_from_preamble() -> None:
    assert clean_model_output('Based on the description, the category is "Transportasi".') == "Transportasi"
    assert clean_model_output("Okay, this looks like shopping") == "Lain-lain"


def test_clean_model_output_rejects_long_and_empty_text() -> None:
    assert clean_model_output("A" * 31) == "Lain-lain"
    assert clean_model_output("   ") == ""


def test_clean_model_output_collapses_jajan_variants() -> None:
    assert clean_model_output("jajan-jajan") == "Jajan"


@pytest.mark.parametrize("name", ["Unknown", "Tidak diketahui", "Lainnya", "??", "123", "ab", "null", "N/A"])
def test_unclear_categories(name: str) -> None:
    assert is_unclear_category(name)


def test_clear_category() -> None:
    assert not is_unclear_category("Transportasi")


def test_icons() -> None:
    assert icon_for_category("Unmapped Category") == "CircleDollarSignIcon"
    assert icon_for_category("Makanan") != "CircleDollarSignIcon"


@pytest.mark.parametrize(
    ("description", "expected"),
    [
        ("Bayar Zakat Fitrah", "Zakat"),
        ("THR lebaran", "Pendapatan"),
        ("Bonus thr-2025", "Pendapatan"),
        ("Renovasi bathroom", None),
        ("Tempe goreng", "Makanan"),
        ("tempe", "Makanan"),
        ("Tempeh burger", None),
        ("Makan siang", None),
    ],
)
def test_shortcut_category(description: str, expected: str | None) -> None:
    assert shortcut_category(description) == expected
