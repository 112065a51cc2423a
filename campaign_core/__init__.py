"""
Core modules for Comment Campaign Detector.

This package contains shared configuration, data classes and validation.
"""

from campaign_core.constants import (
    APP_NAME,
    APP_VERSION,
    ContextLabel,
    LegitimacyCategory,
    RangeKind,
    Sentiment,
    Severity,
)
from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.models import (
    BatchResult,
    BatchSummary,
    CampaignScore,
    Cluster,
    Comment,
    NormalizedComment,
    VideoContext,
)
from campaign_core.validators import (
    ValidationResult,
    CommentValidator,
    ContextValidator,
)
from campaign_core.settings import SettingsManager, ConfigStore

__all__ = [
    # Constants
    "APP_NAME",
    "APP_VERSION",
    # Enums
    "ContextLabel",
    "LegitimacyCategory",
    "RangeKind",
    "Sentiment",
    "Severity",
    # Configuration
    "DEFAULT_CONFIG",
    "DetectionConfig",
    # Models
    "BatchResult",
    "BatchSummary",
    "CampaignScore",
    "Cluster",
    "Comment",
    "NormalizedComment",
    "VideoContext",
    # Validators
    "ValidationResult",
    "CommentValidator",
    "ContextValidator",
    # Settings
    "SettingsManager",
    "ConfigStore",
]
