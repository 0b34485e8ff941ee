from datetime import date

import pytest

from fintrack_ai.models import Currency, ParsedTransactionCandidate, Transaction, TransactionResult
from fintrack_ai.services.confirmation import format_confirmation, format_results
from fintrack_ai.services.currencies import CurrencyResolver
from fintrack_ai.storage.currencies import CurrencyRepository


@pytest.fixture
def currencies() -> CurrencyResolver:
    return CurrencyResolver(CurrencyRepository())


def candidate(**overrides) -> ParsedTransactionCandidate:
    values = {"description": "Makan enak", "date": date(2025, 8, 5)}
    values.update(overrides)
    return ParsedTransactionCandidate(**values)


def test_confirmation_lists_missing_fields() -> None:
    response = format_confirmation(
        [
            candidate(amount=8000),
            candidate(description="Belanja", raw_currency="XYZ"),
        ],
        "outcome",
    )

    assert response.success is True
    assert response.action == "confirmation_needed"
    assert len(response.pending_transactions) == 2
    assert response.message == (
        "Saya menemukan beberapa transaksi yang perlu konfirmasi:\n\n"
        "1. Makan enak (8,000) - 05 Aug 2025\n"
        "   - Mohon untuk input mata uang (IDR/SGD/USD/EUR)\n"
        "\n"
        "2. Belanja - 05 Aug 2025\n"
        "   - Berapa jumlahnya?\n"
        "   - Mata uang 'XYZ' tidak dikenali. Mohon pilih: IDR, SGD, USD, atau EUR\n"
        "\n"
        "Silakan berikan informasi yang masih kurang untuk melanjutkan pencatatan transaksi."
    )


def test_results_message(currencies: CurrencyResolver) -> None:
    idr = currencies.repository.create(Currency(name="IDR", symbol="Rp"))
    stored = Transaction(
        id=1,
        account_id=1,
        type="outcome",
        description="Makan enak",
        amount=8000,
        currency_id=idr.id,
        transaction_date=date(2025, 8, 5),
    )
    results = [
        TransactionResult(success=True, type="outcome", transaction=stored),
        TransactionResult(success=False, error="disk full", data=candidate(description="Jajan", amount=2000)),
    ]

    response = format_results(results, "outcome", currencies)

    assert response.action == "transactions_created"
    assert response.message == (
        "✅ Berhasil mencatat 1 transaksi pengeluaran:\n\n"
        "• Makan enak: Rp 8,000 (05 Aug 2025)\n"
        "\n❌ Gagal mencatat 1 transaksi:\n"
        "• Jajan: disk full\n"
        "\nTransaksi telah disimpan dan akan dikategorikan secara otomatis."
    )


def test_results_label_follows_transaction_type(currencies: CurrencyResolver) -> None:
    stored = Transaction(id=1, account_id=1, type="income", description="Gaji", amount=5000000)
    response = format_results([TransactionResult(success=True, type="income", transaction=stored)], "dashboard", currencies)

    assert response.message.startswith("✅ Berhasil mencatat 1 transaksi pemasukan:")
    # Unknown currency falls back to the IDR code
    assert "• Gaji: IDR 5,000,000" in response.message


def test_partial_success_is_reported_with_confirmation(currencies: CurrencyResolver) -> None:
    stored = Transaction(id=1, account_id=1, type="outcome", description="Makan", amount=5000)
    response = format_confirmation(
        [candidate(amount=None)],
        "outcome",
        results=[TransactionResult(success=True, type="outcome", transaction=stored)],
        currencies=currencies,
    )

    assert response.action == "confirmation_needed"
    assert response.message.startswith("✅ Berhasil mencatat 1 transaksi pengeluaran:")
    assert "Saya menemukan beberapa transaksi yang perlu konfirmasi" in response.message
    assert len(response.results) == 1
