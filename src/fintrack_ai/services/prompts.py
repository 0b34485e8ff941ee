"""Prompt builders for the chat assistant and the transaction parser."""
from datetime import date, datetime
from typing import Any

BASE_CHAT_PROMPT = """You are a professional and helpful AI financial assistant. Provide solid and practical financial advice using formal yet friendly Indonesian language that is easy to understand.

IMPORTANT RULES:
1. ALWAYS respond in proper, formal Indonesian language (Bahasa Indonesia)
2. Use professional language that is friendly and easy to understand
3. MUST use actual data provided in the context - do not make up numbers!
4. When users ask about numbers/amounts, always refer to the existing data with high accuracy
5. Provide deep analysis and practical advice based on the user's real financial condition
6. Consider current Indonesian economic conditions when giving advice
7. Answer professionally, informatively, and supportively using specific data
8. Provide comprehensive analysis including daily, weekly, and monthly patterns
9. Provide deep insights about user's financial habits based on transaction data
10. Your responses must be in Indonesian, but you can understand this English prompt

"""

DEFAULT_CONTEXT_PROMPT = (
    "Kamu sedang membantu user dengan aplikasi keuangan mereka. "
    "Berikan bantuan yang relevan dengan pertanyaan mereka."
)

SETTINGS_CONTEXT_PROMPT = """PAGE CONTEXT: Settings/Configuration

You are helping the user on the settings page. Focus on (respond in Indonesian):
- Application usage help
- Settings optimization tips
- Account security
- Application features
- General troubleshooting"""

INCOME_INPUT_HINTS = """- TRANSACTION INPUT: You can input income transactions with flexible date formats:
  * "Gaji Rp 5000000" (today)
  * "Gaji tanggal 25 Rp 5000000" (current month, day 25)
  * "Bonus tanggal 15 agustus Rp 1000000" (current year, August 15)
  * "Freelance tanggal 5 agustus 2024 Rp 2000000" (full date)
  * Amount without currency will prompt for currency selection"""

OUTCOME_INPUT_HINTS = """- TRANSACTION INPUT: You can input outcome transactions with flexible date formats:
  * "Makan enak Rp 8000" (today)
  * "Belanja tanggal 5 Rp 25000" (current month, day 5)
  * "Beli beras tanggal 10 agustus Rp 15000" (current year, August 10)
  * "Bayar listrik tanggal 1 januari 2024 Rp 100000" (full date)
  * Amount without currency will prompt for currency selection"""


def number_format(value: Any, decimals: int = 0) -> str:
    """Thousands-separated number, e.g. ``number_format(1234567)`` -> ``1,234,567``."""
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        number = 0.0
    return f"{number:,.{decimals}f}"


def _format_date(raw: Any, pattern: str) -> str:
    try:
        return datetime.fromisoformat(str(raw)).strftime(pattern)
    except ValueError:
        return str(raw)


def _filters_block(filters: dict[str, Any], include_mode: bool = False) -> str:
    lines = [
        f"- Year: {filters.get('year', 'N/A')}",
        f"- Month: {filters.get('month', 'N/A')}",
    ]
    if include_mode:
        lines.append(f"- Mode: {filters.get('mode', 'N/A')}")
    lines.append(f"- Currency: {filters.get('currency', 'IDR')}")
    return "ACTIVE FILTERS:\n" + "\n".join(lines)


def dashboard_context(data: dict[str, Any]) -> str:
    stats = data.get("stats") or {}
    filters = data.get("filters") or {}
    breakdown = data.get("currencyBreakdown") or {}
    period = data.get("currentPeriod") or "periode saat ini"

    text = f"""PAGE CONTEXT: Financial Dashboard

You are helping the user on the dashboard page. User's financial data for {period}:

ACTUAL FINANCIAL DATA:
- Total Income: {number_format(stats.get('totalRevenue'))} IDR
- Total Outcome: {number_format(stats.get('totalOutcome'))} IDR
- Balance: {number_format(stats.get('balance'))} IDR
- Changes from previous period:
  * Income: {stats.get('revenueChange', 0)}%
  * Outcome: {stats.get('outcomeChange', 0)}%
  * Balance: {stats.get('balanceChange', 0)}%

{_filters_block(filters, include_mode=True)}

CURRENCY BREAKDOWN:"""
    for code in ("IDR", "SGD"):
        totals = breakdown.get(code)
        if totals:
            text += (
                f"\n- {code}: Income {number_format(totals.get('income'))}, "
                f"Outcome {number_format(totals.get('outcome'))}, "
                f"Balance {number_format(totals.get('balance'))}"
            )
    text += (
        "\n\nUSE THIS ACTUAL DATA in your Indonesian responses! Provide comprehensive analysis based on "
        "the real numbers provided. Help the user understand their financial condition with specific "
        "references to their data, including daily and weekly pattern analysis."
    )
    return text


def _summary_blocks(summary: dict[str, Any], label: str, top_limit: int) -> str:
    text = ""
    if summary:
        text += (
            f"\n\n{label} TRANSACTION SUMMARY:"
            f"\n- Total Transactions: {summary.get('totalTransactions', 0)} transactions"
            f"\n- Total Amount: {number_format(summary.get('totalAmount'))} IDR"
            f"\n- Average per Transaction: {number_format(summary.get('averageAmount'))} IDR"
        )
        top = summary.get("topCategories") or []
        if top:
            heading = "TOP INCOME CATEGORIES" if label == "INCOME" else "TOP EXPENSE CATEGORIES"
            text += f"\n\n{heading}:"
            for item in top[:top_limit]:
                text += (
                    f"\n- {item.get('category')}: {number_format(item.get('amount'))} IDR "
                    f"({item.get('count', 0)} transactions)"
                )
        monthly = summary.get("monthlyBreakdown") or []
        if monthly:
            text += "\n\nMONTHLY BREAKDOWN:"
            for month in monthly:
                name = _format_date(f"{month.get('month')}-01", "%b %Y")
                text += f"\n- {name}: {number_format(month.get('amount'))} IDR ({month.get('count', 0)} transactions)"

    daily = summary.get("dailyBreakdown") or []
    if daily:
        text += "\n\nDAILY ANALYSIS:"
        for day in daily[-7:]:
            name = _format_date(day.get("date"), "%A, %d %b %Y")
            text += f"\n- {name}: {number_format(day.get('amount'))} IDR ({day.get('count', 0)} transactions)"

    weekdays = summary.get("dayOfWeekAnalysis") or []
    if weekdays:
        text += "\n\nDAY OF WEEK PATTERNS:"
        for day in weekdays:
            text += (
                f"\n- {day.get('dayName')}: {number_format(day.get('amount'))} IDR "
                f"({day.get('count', 0)} transaksi, avg: {number_format(day.get('averageAmount'))})"
            )
    return text


def _activity_block(summary: dict[str, Any], income: bool) -> str:
    freq = summary.get("frequencyAnalysis")
    if not freq:
        return ""
    noun = "income" if income else "spending"
    return (
        "\n\nACTIVITY ANALYSIS:"
        f"\n- Most active day: {freq.get('mostActiveDay')}"
        f"\n- Highest {noun} day: {freq.get('mostSpendingDay')}"
        f"\n- Average transactions per day: {number_format(freq.get('averageTransactionsPerDay'), 1)}"
        f"\n- Average {'amount' if income else 'spending'} per day: {number_format(freq.get('averageAmountPerDay'))} IDR"
        f"\n- Peak {noun} date: {_format_date(freq.get('peakSpendingDate'), '%d %b %Y')} "
        f"({number_format(freq.get('peakSpendingAmount'))} IDR)"
    )


def _trend_block(summary: dict[str, Any], income: bool) -> str:
    trend = summary.get("trendAnalysis")
    if not trend:
        return ""
    label = "Income velocity" if income else "Spending velocity"
    return f"\n\nTREND ANALYSIS:\n- Weekly trend: {trend.get('weeklyTrend')}\n- {label}: {trend.get('spendingVelocity')}"


def income_context(data: dict[str, Any]) -> str:
    stats = data.get("stats") or {}
    summary = data.get("summary") or {}
    period = data.get("currentPeriod") or "periode saat ini"

    text = f"""PAGE CONTEXT: Income/Revenue Page

You are helping the user on the income page for {period}.

ACTUAL INCOME DATA:
- Total Income: {number_format(stats.get('totalRevenue'))} IDR
- Change from previous period: {stats.get('revenueChange', 0)}%
- Daily Average Income: {number_format(stats.get('dailyIncomeAverage'))} IDR/day"""
    text += _summary_blocks(summary, "INCOME", top_limit=3)
    text += _activity_block(summary, income=True)
    text += _trend_block(summary, income=True)
    text += f"""

{_filters_block(data.get('filters') or {})}

USE THIS ACTUAL DATA! When user asks about income on specific days, look at dailyBreakdown. For weekly patterns, refer to dayOfWeekAnalysis. For trends, use trendAnalysis.

Focus areas to help with (respond in Indonesian):
- Analyze daily and weekly income patterns
- Identify days with highest income
- Optimize income based on visible temporal patterns
- Income diversification suggestions based on deep analysis
- Predictions and recommendations based on trend analysis
{INCOME_INPUT_HINTS}"""
    return text


def outcome_context(data: dict[str, Any]) -> str:
    stats = data.get("stats") or {}
    summary = data.get("summary") or {}
    period = data.get("currentPeriod") or "periode saat ini"

    text = f"""PAGE CONTEXT: Outcome/Expenses Page

You are helping the user on the outcome page for {period}.

ACTUAL OUTCOME DATA:
- Total Outcome: {number_format(stats.get('totalOutcome'))} IDR
- Change from previous period: {stats.get('outcomeChange', 0)}%
- Daily Average Outcome: {number_format(stats.get('dailyOutcomeAverage'))} IDR/day"""
    text += _summary_blocks(summary, "OUTCOME", top_limit=5)
    text += _activity_block(summary, income=False)

    times = summary.get("timePatterns")
    if times:
        text += (
            "\n\nTIME PATTERNS:"
            f"\n- Morning (06:00-12:00): {times.get('morningTransactions', 0)} transactions"
            f"\n- Afternoon (12:00-17:00): {times.get('afternoonTransactions', 0)} transactions"
            f"\n- Evening (17:00-22:00): {times.get('eveningTransactions', 0)} transactions"
            f"\n- Night (22:00-06:00): {times.get('nightTransactions', 0)} transactions"
        )
    text += _trend_block(summary, income=False)
    text += f"""

{_filters_block(data.get('filters') or {})}

USE THIS ACTUAL DATA! When user asks about spending on specific days, look at dailyBreakdown. For daily patterns, refer to dayOfWeekAnalysis. For time analysis, use timePatterns.

Focus areas to help with (respond in Indonesian):
- Deep analysis of daily and weekly spending patterns
- Identify days with highest expenses
- Analyze time-based spending patterns (morning, afternoon, evening, night)
- Money-saving tips based on specific temporal patterns
- Budgeting strategy based on comprehensive spending pattern analysis
- Optimization recommendations based on trend analysis and frequency patterns
{OUTCOME_INPUT_HINTS}"""
    return text


CONTEXT_BUILDERS = {
    "dashboard": dashboard_context,
    "income": income_context,
    "outcome": outcome_context,
    "settings": lambda _: SETTINGS_CONTEXT_PROMPT,
}


def build_chat_system_prompt(context: str, context_data: dict[str, Any] | None = None) -> str:
    builder = CONTEXT_BUILDERS.get(context)
    if builder is None:
        return BASE_CHAT_PROMPT + DEFAULT_CONTEXT_PROMPT
    return BASE_CHAT_PROMPT + builder(context_data or {})


def build_parser_prompt(today: date) -> str:
    current = today.isoformat()
    fifth = today.replace(day=5).isoformat()
    return f"""You are a transaction parser. Extract transaction information from Indonesian text and return ONLY a valid JSON array.

RULES:
1. Extract multiple transactions if mentioned
2. For each transaction, extract: description, amount, currency, date, type (if specified)
3. DATE PARSING RULES:
   - No date specified: use "{current}"
   - "tanggal 5" or "5": use current year/month with day 5
   - "tanggal 5 agustus" or "5 agustus": use current year with specified month/day
   - "tanggal 5 agustus 2024" or "5 agustus 2024": use full specified date
   - Handle Indonesian month names: januari=1, februari=2, maret=3, april=4, mei=5, juni=6, juli=7, agustus=8, september=9, oktober=10, november=11, desember=12
4. CURRENCY RULES:
   - If currency is specified (Rp, IDR, SGD, USD, etc): include it
   - If NO currency specified: DO NOT include currency field (leave it null/undefined)
5. Convert amounts to numbers (remove "Rp", ".", ",")
6. Return dates in YYYY-MM-DD format
7. For dashboard context: detect "catat pengeluaran" or "catat pemasukan" to determine type
8. Return ONLY valid JSON, no explanations

Current context: Year={today.year}, Month={today.month}, Date={current}

Example input: "Catat Pengeluaran: Makan Enak Rp 5000, Makan Chiki Rp 5000"
Example output: [{{"description":"Makan Enak","amount":5000,"currency":"IDR","date":"{current}","type":"outcome"}},{{"description":"Makan Chiki","amount":5000,"currency":"IDR","date":"{current}","type":"outcome"}}]

Example input: "Makan enak Rp 5000"
Example output: [{{"description":"Makan enak","amount":5000,"currency":"IDR","date":"{current}"}}]

Example input: "Makan enak tanggal 5 Rp 5000"
Example output: [{{"description":"Makan enak","amount":5000,"currency":"IDR","date":"{fifth}"}}]

Example input: "Makan enak tanggal 5 agustus 2024 Rp 5000"
Example output: [{{"description":"Makan enak","amount":5000,"currency":"IDR","date":"2024-08-05"}}]

Example input: "Makan enak 5000" (no currency)
Example output: [{{"description":"Makan enak","amount":5000,"date":"{current}"}}]"""


def build_conversation_prompt(history: list[dict[str, str]], message: str, turns: int = 5) -> str:
    lines = []
    for entry in history[-turns:]:
        role = "User" if entry.get("role") == "user" else "Kamu"
        lines.append(f"{role}: {entry.get('message', '')}")
    lines.append(f"User: {message}")
    return "\n".join(lines)


CONVERSATION_STARTERS: dict[str, list[str]] = {
    "dashboard": [
        "Bagaimana cara membaca dashboard keuangan ini?",
        "Analisis kondisi keuangan saya saat ini",
        "Apa saran untuk meningkatkan kesehatan finansial?",
        "Catat Pengeluaran: Makan Enak Rp 5000, Makan Chiki tanggal 5 Rp 5000",
        "Catat Pemasukan: Gaji tanggal 25 Rp 5000000",
    ],
    "income": [
        "Hari apa saya paling banyak mendapat income?",
        "Analisis pola income harian dan mingguan saya",
        "Kategori income mana yang paling konsisten?",
        "Gaji tanggal 25 Rp 5000000",
        "Bonus tanggal 15 agustus Rp 1000000",
    ],
    "outcome": [
        "Hari apa saya paling banyak mengeluarkan uang?",
        "Analisis pola pengeluaran berdasarkan waktu",
        "Pada jam berapa saya paling sering berbelanja?",
        "Makan enak tanggal 5 Rp 8000",
        "Belanja beras tanggal 10 agustus 2024 Rp 25000",
    ],
    "settings": [
        "Fitur apa saja yang tersedia di aplikasi ini?",
        "Bagaimana cara mengoptimalkan penggunaan aplikasi?",
        "Tips untuk mengelola data keuangan dengan baik",
    ],
}

DEFAULT_STARTERS = [
    "Bagaimana saya bisa membantu Anda hari ini?",
    "Ada pertanyaan mengenai keuangan Anda?",
    "Butuh analisis finansial mendalam?",
]
