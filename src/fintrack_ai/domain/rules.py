"""
Static lookup tables used to turn free text into canonical category names.

Every table here is plain data plus small predicates so precedence is
explicit: rules are evaluated top to bottom and the first match wins.
"""
import re
from collections.abc import Callable
from dataclasses import dataclass

from fintrack_ai.models import CATCH_ALL_CATEGORY

DEFAULT_ICON = "CircleDollarSignIcon"

STANDARD_CATEGORIES = (
    "Makanan",
    "Transportasi",
    "Hiburan",
    "Utilitas",
    "Perumahan",
    "Belanja",
    "Kesehatan",
    "Pendidikan",
    "Perlengkapan Kantor",
    "Sembako",
    "Investasi",
    "Asuransi",
    "Amal",
    "Perawatan Pribadi",
    "Lain-lain",
    "Jajan",
    "Rokok",
    "Telekomunikasi",
    "Cicilan",
    "Tabungan",
    "Pendapatan",
    "Zakat",
    "Sodaqoh",
    "Pengeluaran",
    "Hutang",
)

INDONESIAN_FOOD_TERMS = (
    "dawet", "soto", "pecel", "gado-gado", "gadogado", "nasi goreng", "mie ayam",
    "bakso", "sate", "rendang", "gudeg", "pempek", "rujak", "rawon", "ketoprak",
    "lontong", "opor", "sambal", "ayam goreng", "ayam bakar", "nasi padang",
    "sop", "gulai", "empal", "serundeng", "semur", "batagor", "siomay",
    "martabak", "terang bulan", "bubur", "ketupat", "bakmi", "bakwan", "lumpia",
    "tahu", "tempe", "sayur", "capcay", "kwetiau", "bihun", "lalapan", "rica",
    "sop buntut", "soto betawi", "soto madura", "soto lamongan", "kuah",
    "bubur ayam", "nasi uduk", "nasi liwet", "nasi kuning", "nasi kebuli",
    "nasi pecel", "nasi campur", "nasi bungkus", "lauk", "kerupuk",
)

JAJAN_TERMS = ("jajan", "cemilan", "snack", "gorengan", "camilan", "keripik", "kerupuk", "jajanan")

JAJAN_VARIANTS = ("jajanan", "jajan-jajan", "jajan jajan")

DEBT_TERMS = ("hutang", "utang", "pinjam", "pinjaman", "cicil", "cicilan", "kredit", "credit")

DEBT_REPAYMENT_TERMS = (
    "bayar hutang", "bayar utang", "membayar hutang", "membayar utang",
    "lunasi hutang", "lunasi utang", "pelunasan hutang", "pelunasan utang",
    "lunas hutang", "lunas utang",
)

UTILITY_TERMS = (
    "utilitas", "utility", "listrik", "electricity", "pln", "air", "water",
    "pdam", "gas", "pgn", "tagihan", "bill", "iuran", "token", "pulsa listrik",
)

INCOME_NAMES = frozenset({
    "Honor", "Dana Masuk", "Dana", "Uang", "Pemasukan", "Penerimaan",
    "Pendapatan", "Gaji", "Bonus", "Upah", "Salary", "Income", "Fee",
    "Komisi", "Royalti", "Dividen", "THR", "Cashback", "Refund",
    "Reward", "Profit", "Laba", "Hadiah", "Transfer Masuk", "Bayar Hutang",
    "Bayar Utang", "Jual", "Penjualan", "Penyewaan", "Sewa", "Pembayaran", "Honorarium",
})

INCOME_TERMS = ("dana masuk", "pemasukan", "gaji", "honor", "jual", "bayar hutang", "bayar utang")

MISTRANSLATIONS = {
    "Temple": "Hiburan",
    "Bensin": "Transportasi",
    "Servis": "Transportasi",
    "SPBU": "Transportasi",
}

SINGLE_WORD_CATEGORIES = {
    "Gaji": "Pendapatan",
    "Bonus": "Pendapatan",
    "Upah": "Pendapatan",
    "Honor": "Pendapatan",
    "Dana": "Pendapatan",
    "Uang": "Pendapatan",
    "Pemasukan": "Pendapatan",
    "Penerimaan": "Pendapatan",
    "Salary": "Pendapatan",
    "Income": "Pendapatan",
    "Fee": "Pendapatan",
    "Komisi": "Pendapatan",
    "Royalti": "Pendapatan",
    "Dividen": "Pendapatan",
    "THR": "Pendapatan",
    "Cashback": "Pendapatan",
    "Refund": "Pendapatan",
    "Reward": "Pendapatan",
    "Profit": "Pendapatan",
    "Laba": "Pendapatan",
    "Hadiah": "Pendapatan",
    "Tahu": "Makanan",
    "Tempe": "Makanan",
    "Bakso": "Makanan",
    "Mie": "Makanan",
    "Nasi": "Makanan",
    "Ayam": "Makanan",
    "Ikan": "Makanan",
    "Roti": "Makanan",
    "Kopi": "Makanan",
    "Soto": "Makanan",
    "Martabak": "Makanan",
    "Seafood": "Makanan",
    "Bubur": "Makanan",
    "Sate": "Makanan",
    "Burger": "Makanan",
    "Pizza": "Makanan",
    "Catering": "Makanan",
    "Gorengan": "Jajan",
    "Camilan": "Jajan",
    "Snack": "Jajan",
    "Keripik": "Jajan",
    "Kerupuk": "Jajan",
    "Cemilan": "Jajan",
    "Jajanan": "Jajan",
    "Coklat": "Jajan",
    "Permen": "Jajan",
    "Donat": "Jajan",
    "Baju": "Belanja",
    "Celana": "Belanja",
    "Sepatu": "Belanja",
    "Elektronik": "Belanja",
    "Tas": "Belanja",
    "Topi": "Belanja",
    "Kacamata": "Belanja",
    "Jaket": "Belanja",
    "Hoodie": "Belanja",
    "Kemeja": "Belanja",
    "Furnitur": "Belanja",
    "Kosmetik": "Belanja",
    "Parfum": "Belanja",
    "Souvenir": "Belanja",
    "Merchandise": "Belanja",
    "Perhiasan": "Belanja",
    "Sabun": "Sembako",
    "Deterjen": "Sembako",
    "Sampo": "Sembako",
    "Pasta": "Sembako",
    "Sikat": "Sembako",
    "Tissue": "Sembako",
    "Pewangi": "Sembako",
    "Pembersih": "Sembako",
    "Sapu": "Sembako",
    "Pel": "Sembako",
}

UNKNOWN_SINGLE_WORD_MAX_LENGTH = 15

UNCLEAR_CATEGORY_NAMES = frozenset({
    "Tidak dapat dikategorikan",
    "Transaksi tidak jelas",
    "Unknown",
    "Transaksi tidak diketahui",
    "Tidak diketahui",
    "Tidak terkategorikan",
    "Uncategorized",
    "Tidak dapat ditentukan",
    "Tidak dapat diidentifikasi",
    "Tidak dapat diklasifikasikan",
    "Lainnya",
    "Other",
    "Miscellaneous",
    "General",
    "Unclassified",
    "Unidentified",
    "Undefined",
})

UNCLEAR_MARKERS = ("tidak", "unknown", "uncategorized", "unclassified", "other", "misc", "general", "lain")

_ONLY_PUNCTUATION_RE = re.compile(r"^[?.]+$")
_NO_LETTERS_RE = re.compile(r"^[^a-zA-Z]+$")
_EMPTY_VALUE_RE = re.compile(r"^(undefined|null|nan|n/a)$", re.IGNORECASE)
_UTI_WORD_RE = re.compile(r"\buti\b")
_TEMPE_WORD_RE = re.compile(r"\btempe\b", re.IGNORECASE)
_THR_WORD_RE = re.compile(r"\bthr\b", re.IGNORECASE)
_QUOTED_RE = re.compile(r"[\"'](.*?)[\"']")

PREAMBLE_MARKERS = ("Okay", "Based on", "The transaction", "This transaction", "I would")
MAX_CATEGORY_LENGTH = 30

STANDARD_CATEGORY_ICONS = {
    "makanan": "UtensilsIcon",
    "transportasi": "CarIcon",
    "hiburan": "GamepadIcon",
    "utilitas": "BoltIcon",
    "perumahan": "HomeIcon",
    "belanja": "ShoppingBagIcon",
    "kesehatan": "HeartIcon",
    "pendidikan": "GraduationCapIcon",
    "perlengkapan kantor": "BriefcaseIcon",
    "sembako": "PackageIcon",
    "investasi": "TrendingUpIcon",
    "asuransi": "ShieldIcon",
    "amal": "GiftIcon",
    "perawatan pribadi": "SparklesIcon",
    "lain-lain": "CircleDollarSignIcon",
    "jajan": "CandyIcon",
    "rokok": "CircleIcon",
    "telekomunikasi": "PhoneIcon",
    "cicilan": "CreditCardIcon",
    "tabungan": "PiggyBankIcon",
    "pendapatan": "WalletIcon",
    "pengeluaran": "WalletMinusIcon",
    "hutang": "WalletMinusIcon",
    "zakat": "HeartHandshakeIcon",
    "sodaqoh": "HeartHandshakeIcon",
}

KEYWORD_ICONS = {
    # food and dining
    "makan": "UtensilsIcon",
    "kuliner": "UtensilsIcon",
    "restoran": "UtensilsIcon",
    "restaurant": "UtensilsIcon",
    "cafe": "CoffeeIcon",
    "kopi": "CoffeeIcon",
    "coffee": "CoffeeIcon",
    "snack": "CandyIcon",
    "cemilan": "CandyIcon",
    "camilan": "CandyIcon",
    "gorengan": "CandyIcon",
    # transportation
    "transport": "CarIcon",
    "bensin": "CarIcon",
    "bbm": "CarIcon",
    "pertamax": "CarIcon",
    "pertalite": "CarIcon",
    "parkir": "CarIcon",
    "parking": "CarIcon",
    "mobil": "CarIcon",
    "car": "CarIcon",
    "motor": "MotorcycleIcon",
    "ojek": "MotorcycleIcon",
    "taxi": "TaxiIcon",
    "taksi": "TaxiIcon",
    "gojek": "TaxiIcon",
    "grab": "TaxiIcon",
    "uber": "TaxiIcon",
    "bus": "BusIcon",
    "kereta": "TrainIcon",
    "train": "TrainIcon",
    "pesawat": "PlaneIcon",
    "plane": "PlaneIcon",
    "travel": "GlobeIcon",
    # utilities
    "utility": "BoltIcon",
    "listrik": "BoltIcon",
    "electricity": "BoltIcon",
    "pln": "BoltIcon",
    "air": "DropletIcon",
    "pdam": "DropletIcon",
    "water": "DropletIcon",
    "gas": "FlameIcon",
    "pgn": "FlameIcon",
    "internet": "WifiIcon",
    "wifi": "WifiIcon",
    "telepon": "PhoneIcon",
    "telephone": "PhoneIcon",
    "phone": "PhoneIcon",
    "pulsa": "PhoneIcon",
    "data": "PhoneIcon",
    "voucher": "PhoneIcon",
    # housing
    "housing": "HomeIcon",
    "rumah": "HomeIcon",
    "house": "HomeIcon",
    "apartemen": "BuildingIcon",
    "apartment": "BuildingIcon",
    "sewa": "KeyIcon",
    "rent": "KeyIcon",
    "kost": "BedIcon",
    "kontrakan": "HomeIcon",
    # shopping
    "shopping": "ShoppingBagIcon",
    "baju": "ShirtIcon",
    "clothes": "ShirtIcon",
    "pakaian": "ShirtIcon",
    "fashion": "ShirtIcon",
    "aksesoris": "GemIcon",
    "accessories": "GemIcon",
    "elektronik": "SmartphoneIcon",
    "electronics": "SmartphoneIcon",
    "gadget": "SmartphoneIcon",
    # health
    "health": "ShieldCheckIcon",
    "dokter": "StethoscopeIcon",
    "doctor": "StethoscopeIcon",
    "rumah sakit": "HeartPulseIcon",
    "hospital": "HeartPulseIcon",
    "klinik": "MedicalCrossIcon",
    "clinic": "MedicalCrossIcon",
    "obat": "PillIcon",
    "medicine": "PillIcon",
    "apotek": "PillIcon",
    "pharmacy": "PillIcon",
    "vitamin": "PillIcon",
    # education
    "education": "GraduationCapIcon",
    "sekolah": "GraduationCapIcon",
    "school": "GraduationCapIcon",
    "kuliah": "GraduationCapIcon",
    "college": "GraduationCapIcon",
    "universitas": "GraduationCapIcon",
    "university": "GraduationCapIcon",
    "kursus": "GraduationCapIcon",
    "course": "GraduationCapIcon",
    "buku": "BookIcon",
    "book": "BookIcon",
    "alat tulis": "PencilIcon",
    "stationery": "PencilIcon",
    # office
    "kantor": "BriefcaseIcon",
    "office": "BriefcaseIcon",
    "office supplies": "BriefcaseIcon",
    "atk": "BriefcaseIcon",
    "printer": "PrinterIcon",
    "kertas": "FileIcon",
    "paper": "FileIcon",
    # groceries
    "groceries": "ShoppingCartIcon",
    "supermarket": "ShoppingCartIcon",
    "minimarket": "ShoppingCartIcon",
    "pasar": "ShoppingCartIcon",
    "market": "ShoppingCartIcon",
    # investment and savings
    "investment": "TrendingUpIcon",
    "saham": "LineChartIcon",
    "stocks": "LineChartIcon",
    "reksadana": "PieChartIcon",
    "mutual fund": "PieChartIcon",
    "emas": "CoinsIcon",
    "gold": "CoinsIcon",
    "properti": "BuildingIcon",
    "property": "BuildingIcon",
    "deposito": "BankIcon",
    "deposit": "BankIcon",
    "savings": "PiggyBankIcon",
    "menabung": "PiggyBankIcon",
    # insurance
    "insurance": "ShieldIcon",
    "bpjs": "ShieldCheckIcon",
    "jiwa": "ShieldIcon",
    "life": "ShieldIcon",
    "kendaraan": "ShieldIcon",
    "vehicle": "ShieldIcon",
    # charity
    "charity": "HeartHandshakeIcon",
    "donasi": "HeartHandshakeIcon",
    "donation": "HeartHandshakeIcon",
    "sedekah": "HeartHandshakeIcon",
    # personal care
    "perawatan": "SparklesIcon",
    "care": "SparklesIcon",
    "pribadi": "UserIcon",
    "personal": "UserIcon",
    "salon": "ScissorsIcon",
    "potong rambut": "ScissorsIcon",
    "haircut": "ScissorsIcon",
    "spa": "SparklesIcon",
    "massage": "SparklesIcon",
    "pijat": "SparklesIcon",
    # entertainment
    "entertainment": "GamepadIcon",
    "film": "ClapperboardIcon",
    "movie": "ClapperboardIcon",
    "bioskop": "ClapperboardIcon",
    "cinema": "ClapperboardIcon",
    "konser": "MusicIcon",
    "concert": "MusicIcon",
    "musik": "MusicIcon",
    "music": "MusicIcon",
    "game": "GamepadIcon",
    "games": "GamepadIcon",
    "streaming": "PlayIcon",
    "netflix": "PlayIcon",
    "spotify": "MusicIcon",
    "youtube": "PlayIcon",
    # smoking
    "cigarette": "CircleIcon",
    "smoking": "CircleIcon",
    "tobacco": "CircleIcon",
    # installments
    "installment": "CreditCardIcon",
    "angsuran": "CreditCardIcon",
    "kartu kredit": "CreditCardIcon",
    "credit card": "CreditCardIcon",
    "pinjaman": "CircleDollarSignIcon",
    "loan": "CircleDollarSignIcon",
    "kpr": "HomeIcon",
    "mortgage": "HomeIcon",
    # income
    "income": "WalletIcon",
    "gaji": "WalletIcon",
    "salary": "WalletIcon",
    "upah": "WalletIcon",
    "wage": "WalletIcon",
    "bonus": "WalletIcon",
    "komisi": "WalletIcon",
    "commission": "WalletIcon",
    "honor": "WalletIcon",
    "fee": "WalletIcon",
    # expense and debt
    "expense": "WalletMinusIcon",
    "utang": "WalletMinusIcon",
    "debt": "WalletMinusIcon",
    "pinjam": "WalletMinusIcon",
    "kredit": "WalletMinusIcon",
    "miscellaneous": "CircleDollarSignIcon",
    "other": "CircleDollarSignIcon",
}

# Seed entries for the classification cache, keyed by raw description.
COMMON_TRANSACTIONS = {
    "Makan siang": "Makanan",
    "Makan malam": "Makanan",
    "Sarapan": "Makanan",
    "Kopi": "Makanan",
    "Restoran": "Makanan",
    "Warung makan": "Makanan",
    "Cafe": "Makanan",
    "Jajan": "Makanan",
    "Makanan online": "Makanan",
    "GoFood": "Makanan",
    "GrabFood": "Makanan",
    "ShopeeFood": "Makanan",
    "Bensin": "Transportasi",
    "Parkir": "Transportasi",
    "Ojek online": "Transportasi",
    "Gojek": "Transportasi",
    "Grab": "Transportasi",
    "Taksi": "Transportasi",
    "Angkot": "Transportasi",
    "Bus": "Transportasi",
    "Kereta": "Transportasi",
    "Pesawat": "Transportasi",
    "Tiket transportasi": "Transportasi",
    "Listrik": "Utilitas",
    "Air": "Utilitas",
    "Internet": "Utilitas",
    "Telepon": "Utilitas",
    "Gas": "Utilitas",
    "PLN": "Utilitas",
    "PDAM": "Utilitas",
    "Indihome": "Utilitas",
    "Wifi": "Utilitas",
    "Belanja bulanan": "Belanja",
    "Supermarket": "Belanja",
    "Minimarket": "Belanja",
    "Indomaret": "Belanja",
    "Alfamart": "Belanja",
    "Pakaian": "Belanja",
    "Sepatu": "Belanja",
    "Aksesoris": "Belanja",
    "Elektronik": "Belanja",
    "Bioskop": "Hiburan",
    "Konser": "Hiburan",
    "Netflix": "Hiburan",
    "Spotify": "Hiburan",
    "Disney+": "Hiburan",
    "Langganan streaming": "Hiburan",
    "Game": "Hiburan",
    "Buku": "Hiburan",
    "Dokter": "Kesehatan",
    "Rumah sakit": "Kesehatan",
    "Apotek": "Kesehatan",
    "Obat": "Kesehatan",
    "Vitamin": "Kesehatan",
    "Asuransi kesehatan": "Kesehatan",
    "BPJS": "Kesehatan",
    "Sekolah": "Pendidikan",
    "Kuliah": "Pendidikan",
    "Kursus": "Pendidikan",
    "Buku pelajaran": "Pendidikan",
    "SPP": "Pendidikan",
    "Uang sekolah": "Pendidikan",
    "Sewa rumah": "Perumahan",
    "Sewa kost": "Perumahan",
    "Cicilan rumah": "Perumahan",
    "KPR": "Perumahan",
    "Perabotan": "Perumahan",
    "Perbaikan rumah": "Perumahan",
    "Pulsa": "Telekomunikasi",
    "Paket data": "Telekomunikasi",
    "Telkomsel": "Telekomunikasi",
    "XL": "Telekomunikasi",
    "Indosat": "Telekomunikasi",
    "Smartfren": "Telekomunikasi",
    "Gaji": "Pendapatan",
    "Bonus": "Pendapatan",
    "Komisi": "Pendapatan",
    "Freelance": "Pendapatan",
    "Penjualan": "Pendapatan",
    "Dividen": "Pendapatan",
    "Bunga": "Pendapatan",
    "Saham": "Investasi",
    "Reksa dana": "Investasi",
    "Emas": "Investasi",
    "Deposito": "Investasi",
    "Obligasi": "Investasi",
    "Cryptocurrency": "Investasi",
    "P2P Lending": "Investasi",
    "Donasi": "Amal",
    "Zakat": "Zakat",
    "Zakat penghasilan": "Zakat",
    "Sedekah": "Sodaqoh",
    "Sumbangan": "Amal",
    "Cicilan motor": "Cicilan",
    "Cicilan mobil": "Cicilan",
    "Cicilan gadget": "Cicilan",
    "Cicilan kartu kredit": "Cicilan",
    "Pinjaman": "Cicilan",
    "Tabungan": "Tabungan",
    "Transfer ke tabungan": "Tabungan",
    "Dana darurat": "Tabungan",
}


def _contains_any(text: str, terms: tuple[str, ...]) -> bool:
    lowered = text.strip().lower()
    return any(term in lowered for term in terms)


def is_indonesian_food(term: str) -> bool:
    return _contains_any(term, INDONESIAN_FOOD_TERMS)


def is_jajan_related(term: str) -> bool:
    return _contains_any(term, JAJAN_TERMS)


def is_debt_related(term: str) -> bool:
    return _contains_any(term, DEBT_TERMS)


def is_debt_repayment(term: str) -> bool:
    return _contains_any(term, DEBT_REPAYMENT_TERMS)


def is_utility_related(term: str) -> bool:
    lowered = term.strip().lower()
    # "uti" is Javanese for mother, never a utility bill.
    if lowered == "uti" or _UTI_WORD_RE.search(lowered):
        return False
    return any(utility in lowered for utility in UTILITY_TERMS)


def is_income_related(term: str) -> bool:
    if is_jajan_related(term):
        return False
    return term in INCOME_NAMES or _contains_any(term, INCOME_TERMS)


def is_unknown_single_word(term: str) -> bool:
    return " " not in term and len(term) < UNKNOWN_SINGLE_WORD_MAX_LENGTH


@dataclass(frozen=True)
class CategoryRule:
    label: str
    matches: Callable[[str], bool]
    result: Callable[[str], str]


def _fixed(name: str) -> Callable[[str], str]:
    return lambda _: name


# Evaluated in order; the first matching rule decides the category.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("indonesian-food", is_indonesian_food, _fixed("Makanan")),
    CategoryRule("jajan", is_jajan_related, _fixed("Jajan")),
    CategoryRule(
        "debt",
        lambda term: is_debt_related(term) and not is_debt_repayment(term),
        _fixed("Hutang"),
    ),
    CategoryRule("utility", is_utility_related, _fixed("Utilitas")),
    CategoryRule("income", is_income_related, _fixed("Pendapatan")),
    CategoryRule("uti", lambda term: term.lower() == "uti", _fixed(CATCH_ALL_CATEGORY)),
    CategoryRule("standard", lambda term: term in STANDARD_CATEGORIES, lambda term: term),
    CategoryRule("mistranslation", lambda term: term in MISTRANSLATIONS, MISTRANSLATIONS.__getitem__),
    CategoryRule("single-word", lambda term: term in SINGLE_WORD_CATEGORIES, SINGLE_WORD_CATEGORIES.__getitem__),
    CategoryRule("unknown-single-word", is_unknown_single_word, _fixed(CATCH_ALL_CATEGORY)),
)


def match_category_rule(name: str) -> CategoryRule | None:
    for rule in CATEGORY_RULES:
        if rule.matches(name):
            return rule
    return None


def map_category_name(name: str) -> str:
    """Map a cleaned category name through the rule table; unmatched names pass through."""
    rule = match_category_rule(name)
    if rule is None:
        return name
    return rule.result(name)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def clean_model_output(raw: str) -> str:
    """
    Reduce raw model text to a canonical category name.

    Returns an empty string when the model produced nothing usable.
    """
    name = capitalize_first(raw.strip().strip("\"'"))
    if not name:
        return ""

    if any(marker in name for marker in PREAMBLE_MARKERS):
        quoted = _QUOTED_RE.search(name)
        name = quoted.group(1) if quoted and quoted.group(1) else CATCH_ALL_CATEGORY

    if len(name) > MAX_CATEGORY_LENGTH:
        name = CATCH_ALL_CATEGORY

    if name.lower() in JAJAN_VARIANTS:
        name = "Jajan"

    return map_category_name(name)


def is_unclear_category(name: str) -> bool:
    lowered = name.lower()
    return (
        name in UNCLEAR_CATEGORY_NAMES
        or any(marker in lowered for marker in UNCLEAR_MARKERS)
        or bool(_ONLY_PUNCTUATION_RE.match(name))
        or len(name) < 3
        or bool(_NO_LETTERS_RE.match(name))
        or bool(_EMPTY_VALUE_RE.match(name))
    )


def icon_for_category(name: str) -> str:
    key = name.lower()
    if key in STANDARD_CATEGORY_ICONS:
        return STANDARD_CATEGORY_ICONS[key]
    return KEYWORD_ICONS.get(key, DEFAULT_ICON)


@dataclass(frozen=True)
class ShortcutRule:
    label: str
    matches: Callable[[str], bool]
    category: str


SHORTCUT_RULES: tuple[ShortcutRule, ...] = (
    ShortcutRule("zakat", lambda text: "zakat" in text.lower(), "Zakat"),
    ShortcutRule("thr", lambda text: bool(_THR_WORD_RE.search(text)), "Pendapatan"),
    ShortcutRule(
        "tempe",
        lambda text: text.strip().lower() == "tempe" or bool(_TEMPE_WORD_RE.search(text)),
        "Makanan",
    ),
)


def shortcut_category(description: str) -> str | None:
    """Category forced by keyword before any cache or model lookup."""
    for rule in SHORTCUT_RULES:
        if rule.matches(description):
            return rule.category
    return None
