"""
Detection constants and configuration tables.

Centralized location for every keyword list, Unicode table, threshold and
score weight used by the campaign detection engine. The tables here are the
defaults behind ``DetectionConfig``; nothing in this module is mutated at
runtime.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple


# =============================================================================
# APPLICATION METADATA
# =============================================================================

APP_NAME = "Comment Campaign Detector"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Detect coordinated spam campaigns in batches of comments"


# =============================================================================
# ENUMS
# =============================================================================

class RangeKind(Enum):
    """How offsets inside a fancy Unicode range map back to ASCII."""
    ALPHA = "alpha"    # 0-25 -> A-Z, 26-51 -> a-z
    UPPER = "upper"    # 0-25 -> A-Z
    LOWER = "lower"    # 0-25 -> a-z
    DIGIT = "digit"    # 0-9 -> 0-9


class Severity(Enum):
    """Campaign severity levels used in reports."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @classmethod
    def from_score(cls, score: int) -> "Severity":
        """Map a campaign score (0-100) to a severity level."""
        if score >= 90:
            return cls.CRITICAL
        if score >= 80:
            return cls.HIGH
        if score >= 70:
            return cls.MEDIUM
        return cls.LOW


class ContextLabel(Enum):
    """Communicative context of a single comment."""
    UNKNOWN = "unknown"
    EDUCATIONAL = "educational"
    QUESTION = "question"
    WARNING = "warning"
    PROMOTIONAL = "promotional"
    VIDEO_RELEVANT = "video_relevant"


class Sentiment(Enum):
    """Coarse sentiment of a comment."""
    CONSTRUCTIVE = "constructive"
    NEUTRAL = "neutral"
    PROMOTIONAL = "promotional"


class LegitimacyCategory(Enum):
    """Reasons a cluster's representative comment is considered genuine."""
    SHORT_GENUINE = "short_genuine"
    SIMPLE_PRAISE = "simple_praise"
    VIDEO_RELEVANT = "video_relevant"
    EDUCATIONAL = "educational"

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        mapping = {
            LegitimacyCategory.SHORT_GENUINE: "very short genuine reaction",
            LegitimacyCategory.SIMPLE_PRAISE: "short enthusiastic praise",
            LegitimacyCategory.VIDEO_RELEVANT: "relevant to video topic",
            LegitimacyCategory.EDUCATIONAL: "educational, question or correction",
        }
        return mapping[self]


# =============================================================================
# FANCY UNICODE
# =============================================================================

class FancyRange(NamedTuple):
    """A block of code points that imitates Latin letters or digits."""
    key: str
    start: int
    end: int
    name: str
    kind: RangeKind


FANCY_RANGES: Tuple[FancyRange, ...] = (
    # Mathematical alphanumeric symbols (A-Z followed by a-z)
    FancyRange("mathematical_bold", 0x1D400, 0x1D433, "Mathematical Bold", RangeKind.ALPHA),
    FancyRange("mathematical_italic", 0x1D434, 0x1D467, "Mathematical Italic", RangeKind.ALPHA),
    FancyRange("mathematical_bold_italic", 0x1D468, 0x1D49B, "Mathematical Bold Italic", RangeKind.ALPHA),
    FancyRange("mathematical_script", 0x1D49C, 0x1D4CF, "Mathematical Script", RangeKind.ALPHA),
    FancyRange("mathematical_bold_script", 0x1D4D0, 0x1D503, "Mathematical Bold Script", RangeKind.ALPHA),
    FancyRange("mathematical_fraktur", 0x1D504, 0x1D537, "Mathematical Fraktur", RangeKind.ALPHA),
    FancyRange("mathematical_double_struck", 0x1D538, 0x1D56B, "Mathematical Double-Struck", RangeKind.ALPHA),
    FancyRange("mathematical_bold_fraktur", 0x1D56C, 0x1D59F, "Mathematical Bold Fraktur", RangeKind.ALPHA),
    FancyRange("mathematical_sans_serif", 0x1D5A0, 0x1D5D3, "Mathematical Sans-Serif", RangeKind.ALPHA),
    FancyRange("mathematical_sans_serif_bold", 0x1D5D4, 0x1D607, "Mathematical Sans-Serif Bold", RangeKind.ALPHA),
    FancyRange("mathematical_sans_serif_italic", 0x1D608, 0x1D63B, "Mathematical Sans-Serif Italic", RangeKind.ALPHA),
    FancyRange(
        "mathematical_sans_serif_bold_italic", 0x1D63C, 0x1D66F,
        "Mathematical Sans-Serif Bold Italic", RangeKind.ALPHA,
    ),
    FancyRange("mathematical_monospace", 0x1D670, 0x1D6A3, "Mathematical Monospace", RangeKind.ALPHA),

    # Mathematical digits (0-9 blocks)
    FancyRange("mathematical_bold_digits", 0x1D7CE, 0x1D7D7, "Mathematical Bold Digits", RangeKind.DIGIT),
    FancyRange(
        "mathematical_double_struck_digits", 0x1D7D8, 0x1D7E1,
        "Mathematical Double-Struck Digits", RangeKind.DIGIT,
    ),
    FancyRange(
        "mathematical_sans_serif_digits", 0x1D7E2, 0x1D7EB,
        "Mathematical Sans-Serif Digits", RangeKind.DIGIT,
    ),
    FancyRange(
        "mathematical_sans_serif_bold_digits", 0x1D7EC, 0x1D7F5,
        "Mathematical Sans-Serif Bold Digits", RangeKind.DIGIT,
    ),
    FancyRange("mathematical_monospace_digits", 0x1D7F6, 0x1D7FF, "Mathematical Monospace Digits", RangeKind.DIGIT),

    # Fullwidth forms (punctuation between the two letter blocks is not fancy)
    FancyRange("fullwidth_digits", 0xFF10, 0xFF19, "Fullwidth Digits", RangeKind.DIGIT),
    FancyRange("fullwidth_latin_upper", 0xFF21, 0xFF3A, "Fullwidth Latin", RangeKind.UPPER),
    FancyRange("fullwidth_latin_lower", 0xFF41, 0xFF5A, "Fullwidth Latin", RangeKind.LOWER),

    # Enclosed alphanumerics
    FancyRange("circled_latin", 0x24B6, 0x24E9, "Circled Latin", RangeKind.ALPHA),
    FancyRange("squared_latin", 0x1F130, 0x1F149, "Squared Latin", RangeKind.UPPER),
    FancyRange("negative_circled", 0x1F150, 0x1F169, "Negative Circled", RangeKind.UPPER),
    FancyRange("negative_squared", 0x1F170, 0x1F189, "Negative Squared", RangeKind.UPPER),
)

# Texts with more combining marks than this are flagged (zalgo-style obfuscation)
COMBINING_MARK_LIMIT = 2

# Variation selectors carry no combining class but are counted as marks
VARIATION_SELECTOR_RANGE: Tuple[int, int] = (0xFE00, 0xFE0F)

UNKNOWN_CHAR = "?"


# =============================================================================
# LEET-SPEAK / VISUAL OBFUSCATION
# =============================================================================

# Separator characters used to split keywords apart (j.u.d.o.l, j-u-d-o-l)
SEPARATOR_CHARS = ". -_|*+/\\"

LEET_MAP: Mapping[str, str] = MappingProxyType({
    '0': 'o',
    '1': 'i',
    '3': 'e',
    '4': 'a',
    '5': 's',
    '7': 't',
    '8': 'b',
    '@': 'a',
    '$': 's',
})

# Lower-case Cyrillic/Greek homoglyphs (applied after lower-casing)
VISUAL_MAP: Mapping[str, str] = MappingProxyType({
    # Cyrillic
    'а': 'a', 'в': 'b', 'с': 'c', 'е': 'e', 'н': 'h', 'і': 'i',
    'ј': 'j', 'к': 'k', 'м': 'm', 'о': 'o', 'р': 'p', 'ѕ': 's',
    'т': 't', 'х': 'x', 'у': 'y', 'һ': 'h', 'ԁ': 'd', 'ԛ': 'q',
    'ԝ': 'w',
    # Greek (Δ is the usual stand-in for A)
    'α': 'a', 'δ': 'a', 'ε': 'e', 'ι': 'i', 'κ': 'k', 'ο': 'o',
    'ρ': 'p', 'τ': 't', 'υ': 'u', 'ν': 'v', 'ω': 'w', 'χ': 'x',
})


# =============================================================================
# LEXICAL SPAM SIGNALS
# =============================================================================

# Entries prefixed with this marker are raw regular expressions, not words
REGEX_PREFIX = "re:"

MONEY_KEYWORDS: Tuple[str, ...] = (
    # Currency
    'jt', 'juta', 'rb', 'ribu', 'rp', 'rupiah', 'dollar', 'usd',
    # Amounts
    'jutaan', 'ratusan', 'puluhan', 'milyar', 'miliar',
    # Money actions
    'wd', 'withdraw', 'profit', 'untung', 'cuan', 'duit',
    'uang', 'modal', 'deposit', 'bayar', 'transfer',
    # Gambling
    'jackpot', 'maxwin', 'bilek', 'gacor', 'scatter',
)

URGENCY_KEYWORDS: Tuple[str, ...] = (
    # Time pressure
    'sekarang', 'hari ini', 'buruan', 'cepat', 'segera',
    'jangan sampai', 'keburu', 'limited', 'terbatas',
    # Scarcity
    'tinggal', 'hanya', 'terakhir', 'slot terbatas',
    # Urgency phrases
    'sebelum telat', 'sebelum kehabisan', 'jangan nyesel',
)

LINK_KEYWORDS: Tuple[str, ...] = (
    # Call to action
    'klik', 'klik link', 'cek bio', 'link bio', 'di bio',
    'link di bio', 'lihat bio', 'cek profil', 'daftar',
    'join', 'gabung', 'register', 'sign up', 'kunjungi',
    # URLs
    'http', 'https', 'www', '.com', '.id', '.net',
    'bit.ly', 't.me', 'wa.me',
)

EMOJI_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F300, 0x1F5FF),  # Misc symbols and pictographs
    (0x1F680, 0x1F6FF),  # Transport and map
    (0x2600, 0x26FF),    # Misc symbols
    (0x2700, 0x27BF),    # Dingbats
    (0x1F900, 0x1F9FF),  # Supplemental symbols and pictographs
    (0x1F1E0, 0x1F1FF),  # Regional indicators (flags)
)

EMOJI_DENSITY_THRESHOLD = 0.15
CAPS_RATIO_THRESHOLD = 0.5


# =============================================================================
# CONTEXTUAL SIGNALS
# =============================================================================

EDUCATIONAL_KEYWORDS: Tuple[str, ...] = (
    # Educational
    'penjelasan', 'dijelaskan', 'cara kerja', 'bagaimana', 'mengapa',
    'tutorial', 'panduan', 'belajar', 'edukasi', 'informasi',
    'artikel', 'berita', 'laporan', 'analisis', 'review',
    # Discussion
    'menurut', 'pendapat', 'bagaimana menurut', 'ada yang tahu',
    'apakah benar', 'pengalaman', 'sharing', 'diskusi',
    # Academic/professional
    'penelitian', 'studi', 'data', 'statistik', 'fakta',
    'regulasi', 'hukum', 'legal', 'ilegal', 'undang-undang',
)

QUESTION_KEYWORDS: Tuple[str, ...] = (
    'apakah', 'bagaimana', 'mengapa', 'kapan', 'dimana',
    'siapa', 'berapa', 'apa', 'gimana', 'kenapa',
    'mending', 'lebih baik', 'atau',
)

WARNING_KEYWORDS: Tuple[str, ...] = (
    'bahaya', 'hati-hati', 'waspada', 'jangan',
    'hindari', 'resiko', 'kerugian', 'penipuan',
)

CORRECTION_KEYWORDS: Tuple[str, ...] = (
    'koreksi', 'ralat', 'maksudnya', 'sebenarnya', 'yang benar',
    'bukan begitu', 'correction', 'actually',
)

PROMOTIONAL_INDICATORS: Tuple[str, ...] = (
    # Call to action
    'klik', 'daftar', 'join', 'gabung', 'register',
    'claim', 'klaim', 'ambil', 'dapatkan sekarang',
    # Urgency
    'hari ini', 'sekarang juga', 'limited', 'terbatas',
    'buruan', 'cepat', 'jangan sampai',
    # Guarantees
    'dijamin', 'pasti', 'auto', 'gampang banget',
    'mudah banget', 'terbukti 100%', 'tanpa modal',
)

CONSTRUCTIVE_WORDS: Tuple[str, ...] = (
    'terima kasih', 'bagus', 'menarik', 'informatif',
    'bermanfaat', 'membantu', 'jelas', 'paham',
    'setuju', 'benar', 'baik', 'suka', 'good',
    'keren', 'mantap', 'great', 'nice', 'thanks',
)

PROMOTIONAL_WORDS: Tuple[str, ...] = (
    'menang', 'untung', 'profit', 'mudah',
    'cepat', 'gratis', 'bonus', 'promo',
)

STOP_WORDS: Tuple[str, ...] = (
    'yang', 'dan', 'untuk', 'dari', 'dengan', 'ini', 'itu', 'adalah',
    'pada', 'atau', 'dalam', 'akan', 'oleh', 'juga', 'ada', 'tidak',
    'kan', 'nih', 'sih', 'deh', 'yah', 'dong', 'aja', 'gue', 'gua',
    'the', 'and', 'for', 'from', 'with', 'this', 'that', 'are',
)


class TopicExpansion(NamedTuple):
    """Slang that counts as on-topic once a video matches an indicator."""
    name: str
    indicators: Tuple[str, ...]
    category_hints: Tuple[str, ...]
    keywords: Tuple[str, ...]


TOPIC_EXPANSIONS: Tuple[TopicExpansion, ...] = (
    TopicExpansion(
        name="automotive",
        indicators=(
            'mobil', 'motor', 'car', 'motorcycle', 'bike', 'vehicle', 'automotive',
            'honda', 'toyota', 'yamaha', 'suzuki', 'kawasaki', 'review', 'test drive',
        ),
        category_hints=('auto', 'vehicle'),
        keywords=(
            # Performance
            'gacor', 'ngebut', 'kencang', 'cepat', 'laju', 'akselerasi',
            # Design
            'ganteng', 'cantik', 'keren', 'elegan', 'sporty', 'mewah',
            # Quality/value
            'mantap', 'oke', 'recommended', 'worth', 'layak', 'terbaik',
            # General
            'performa', 'mesin', 'fitur', 'spesifikasi', 'harga', 'interior', 'eksterior',
        ),
    ),
)

# Score adjustments for analyze_context()
EDUCATIONAL_ADJUSTMENT = -30
QUESTION_ADJUSTMENT = -20
WARNING_ADJUSTMENT = -25
PROMOTIONAL_ADJUSTMENT = 15
SENTIMENT_ADJUSTMENT = 10
PROMOTIONAL_INDICATOR_MIN = 2
WHITELIST_QUESTION_MAX_LENGTH = 50

# Per-comment adjustments for analyze_with_video_context()
VIDEO_RELEVANT_ADJUSTMENT = -40
VIDEO_PARTIAL_RELEVANCE_THRESHOLD = 0.15
VIDEO_PARTIAL_ADJUSTMENT = -30

# Cluster score reductions when channel/video context is supplied
LEGITIMACY_REDUCTIONS: Mapping[LegitimacyCategory, int] = MappingProxyType({
    LegitimacyCategory.SHORT_GENUINE: 60,
    LegitimacyCategory.SIMPLE_PRAISE: 55,
    LegitimacyCategory.VIDEO_RELEVANT: 40,
    LegitimacyCategory.EDUCATIONAL: 30,
})

SHORT_GENUINE_MAX_WORDS = 3
SIMPLE_PRAISE_MAX_WORDS = 6
VIDEO_RELEVANCE_THRESHOLD = 0.5
DESCRIPTION_SNIPPET_LENGTH = 200
MIN_KEYWORD_LENGTH = 3


# =============================================================================
# CLUSTERING & SCORING
# =============================================================================

PASS1_SIMILARITY_THRESHOLD = 0.4
MERGE_SIMILARITY_THRESHOLD = 0.3
NGRAM_SIZE = 3
NGRAM_BONUS_WEIGHT = 0.15
MAX_FUZZY_DISTANCE = 2
LEVENSHTEIN_MAX_LENGTH = 255
MIN_CLUSTER_SIZE = 2

NUMBER_PLACEHOLDER = "[N]"
AMOUNT_PLACEHOLDER = "[AMOUNT]"
AMOUNT_WORDS: Tuple[str, ...] = ('bilek', 'cuan', 'profit', 'untung')

TEMPLATE_SPECIFICITY_BASE = 30
TEMPLATE_PLACEHOLDER_PENALTY = 5

# (minimum cluster size, points), largest band first
SIZE_SCORE_BANDS: Tuple[Tuple[int, int], ...] = (
    (15, 60),
    (10, 50),
    (5, 40),
    (3, 30),
    (2, 25),
)

MONEY_POINTS = 10
URGENCY_POINTS = 10
LINK_POINTS = 15
EMOJI_POINTS = 5
CAPS_POINTS = 5

LOW_DIVERSITY_THRESHOLD = 0.3
LOW_DIVERSITY_BONUS = 25
HIGH_DIVERSITY_THRESHOLD = 0.8
HIGH_DIVERSITY_MIN_MEMBERS = 8
HIGH_DIVERSITY_BONUS = 20
UNICODE_BONUS = 15

MAX_SCORE = 100
SPAM_CAMPAIGN_THRESHOLD = 50


# =============================================================================
# SETTINGS CONFIGURATION
# =============================================================================

SETTINGS_FILE = "detection_settings.json"
