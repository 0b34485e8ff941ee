from collections.abc import Sequence

from fintrack_ai.models import ChatResponse, ParsedTransactionCandidate, TransactionResult

from .currencies import CurrencyResolver
from .prompts import number_format

DISPLAY_DATE_FORMAT = "%d %b %Y"
SUPPORTED_CURRENCY_CHOICES = "IDR, SGD, USD, atau EUR"

CONFIRMATION_HEADER = "Saya menemukan beberapa transaksi yang perlu konfirmasi:\n\n"
CONFIRMATION_FOOTER = "Silakan berikan informasi yang masih kurang untuk melanjutkan pencatatan transaksi."
RESULTS_FOOTER = "\nTransaksi telah disimpan dan akan dikategorikan secara otomatis."


def type_label(context: str) -> str:
    return "pemasukan" if context == "income" else "pengeluaran"


def confirmation_message(candidates: Sequence[ParsedTransactionCandidate]) -> str:
    message = CONFIRMATION_HEADER
    for index, candidate in enumerate(candidates, start=1):
        message += f"{index}. {candidate.description}"
        if candidate.amount is not None:
            message += f" ({number_format(candidate.amount)})"
        message += f" - {candidate.date.strftime(DISPLAY_DATE_FORMAT)}\n"

        if candidate.amount is None:
            message += "   - Berapa jumlahnya?\n"
        if candidate.currency_id is None:
            if candidate.raw_currency:
                message += (
                    f"   - Mata uang '{candidate.raw_currency}' tidak dikenali. "
                    f"Mohon pilih: {SUPPORTED_CURRENCY_CHOICES}\n"
                )
            else:
                message += "   - Mohon untuk input mata uang (IDR/SGD/USD/EUR)\n"
        message += "\n"
    return message + CONFIRMATION_FOOTER


def results_message(results: Sequence[TransactionResult], context: str, currencies: CurrencyResolver) -> str:
    successful = [result for result in results if result.success and result.transaction]
    failed = [result for result in results if not result.success]

    message = ""
    if successful:
        # Dashboard entries carry their own type; label by it when they agree.
        kinds = {result.type for result in successful}
        label = type_label(kinds.pop() if len(kinds) == 1 else context)
        message += f"✅ Berhasil mencatat {len(successful)} transaksi {label}:\n\n"
        for result in successful:
            transaction = result.transaction
            symbol = currencies.symbol_for(transaction.currency_id)
            when = transaction.transaction_date.strftime(DISPLAY_DATE_FORMAT)
            message += f"• {transaction.description}: {symbol} {number_format(transaction.amount)} ({when})\n"

    if failed:
        message += f"\n❌ Gagal mencatat {len(failed)} transaksi:\n"
        for result in failed:
            description = result.data.description if result.data else "-"
            message += f"• {description}: {result.error}\n"

    return message + RESULTS_FOOTER


def format_confirmation(
    candidates: Sequence[ParsedTransactionCandidate],
    context: str,
    results: Sequence[TransactionResult] = (),
    currencies: CurrencyResolver | None = None,
) -> ChatResponse:
    """
    Ask the user for whatever the pending candidates are missing.

    When some sibling candidates were already persisted their summary is
    prepended so the user sees both outcomes in one reply.
    """
    message = confirmation_message(candidates)
    if results and currencies is not None:
        message = results_message(results, context, currencies) + "\n\n" + message
    return ChatResponse(
        success=True,
        message=message,
        context=context,
        action="confirmation_needed",
        pending_transactions=list(candidates),
        results=list(results) or None,
    )


def format_results(
    results: Sequence[TransactionResult], context: str, currencies: CurrencyResolver
) -> ChatResponse:
    return ChatResponse(
        success=True,
        message=results_message(results, context, currencies),
        context=context,
        action="transactions_created",
        results=list(results),
    )
