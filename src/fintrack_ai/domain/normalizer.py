import re

# Leading filler words that carry no category signal.
FILLER_PREFIXES = (
    "pembayaran ",
    "payment ",
    "transfer ",
    "trx ",
    "transaksi ",
    "pembelian ",
    "purchase ",
    "bayar ",
    "beli ",
)

_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_filler_prefixes(text: str) -> str:
    # Each prefix is checked once, in order, against the current head.
    for prefix in FILLER_PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix):]
    return text


def normalize_description(text: str) -> str:
    """Lowercase, drop filler prefixes and punctuation, collapse whitespace."""
    normalized = strip_filler_prefixes(text.lower())
    normalized = _NON_WORD_RE.sub(" ", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()
