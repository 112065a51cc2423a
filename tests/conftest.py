import pytest

from campaign_core.config import DEFAULT_CONFIG
from campaign_detector import CampaignDetector
from cluster_detector import ClusterDetector
from contextual_analyzer import ContextualAnalyzer
from fuzzy_matcher import FuzzyMatcher
from pattern_analyzer import PatternAnalyzer
from unicode_analyzer import UnicodeAnalyzer


# ============================================================
# Analyzers
# ============================================================

@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def unicode_analyzer(config):
    return UnicodeAnalyzer(config)


@pytest.fixture
def fuzzy_matcher(config):
    return FuzzyMatcher(config)


@pytest.fixture
def pattern_analyzer(config):
    return PatternAnalyzer(config)


@pytest.fixture
def contextual_analyzer(config):
    return ContextualAnalyzer(config)


@pytest.fixture
def cluster_detector(config):
    return ClusterDetector(config)


@pytest.fixture
def campaign_detector(config):
    return CampaignDetector(config)


# ============================================================
# Sample batches
# ============================================================

@pytest.fixture
def obfuscated_campaign():
    """Three disguised copies of one gambling promo between two genuine comments."""
    return [
        {"id": "s1", "text": "Slot gacor hari ini maxwin!", "author": "bot_one"},
        {"id": "c1", "text": "Nice!", "author": "viewer_one"},
        {"id": "s2", "text": "SL0T GΔCOR hari ini maxwin!", "author": "bot_two"},
        {
            "id": "c2",
            "text": (
                "Penjelasan tentang sistem pengapian dan karburator di menit kedua "
                "sangat membantu saya memperbaiki motor tua di rumah"
            ),
            "author": "viewer_two",
        },
        {"id": "s3", "text": "s.l.o.t g-a-c-o-r hari ini maxwin", "author": "bot_three"},
    ]


@pytest.fixture
def single_author_campaign():
    """Ten identical money/link comments from one account."""
    return [
        {"id": f"b{i}", "text": "Modal receh profit jutaan, klik link di bio", "author": "promo_account"}
        for i in range(10)
    ]


@pytest.fixture
def automotive_video():
    return {
        "title": "Review Honda Jazz 2024",
        "description": "Test drive lengkap Honda Jazz terbaru, performa mesin dan fitur.",
        "category": "Autos & Vehicles",
        "tags": ["honda", "jazz", "review mobil"],
    }
