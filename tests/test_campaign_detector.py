# ============================================================
# Tests for CampaignDetector and the module-level helpers
# ============================================================
# - severity levels and report formatting
# - quick campaign check
# - shared default detector
# ============================================================

import pytest

import campaign_detector as detector_module
from campaign_core.constants import Severity
from campaign_detector import CampaignDetector, CampaignReportEntry


class TestSeverity:

    @pytest.mark.parametrize("score, severity", [
        (100, Severity.CRITICAL),
        (90, Severity.CRITICAL),
        (89, Severity.HIGH),
        (80, Severity.HIGH),
        (79, Severity.MEDIUM),
        (70, Severity.MEDIUM),
        (69, Severity.LOW),
        (50, Severity.LOW),
    ])
    def test_boundaries(self, score, severity):
        assert Severity.from_score(score) is severity


class TestReport:

    def test_single_author_campaign_is_critical(self, campaign_detector, single_author_campaign):
        report = campaign_detector.generate_report(single_author_campaign)

        assert len(report.campaigns) == 1
        entry = report.campaigns[0]
        assert entry.severity is Severity.CRITICAL
        assert entry.confidence == "100%"
        assert entry.comment_count == 10
        assert entry.authors == ["promo_account"]
        assert entry.sample == "Modal receh profit jutaan, klik link di bio"

    def test_obfuscated_campaign_is_high(self, campaign_detector, obfuscated_campaign):
        report = campaign_detector.generate_report(obfuscated_campaign)

        assert [entry.severity for entry in report.campaigns] == [Severity.HIGH]
        assert report.campaigns[0].confidence == "80%"
        assert report.campaigns[0].pattern == "slot gacor hari ini maxwin"
        assert report.summary.total_comments == 5
        assert report.summary.affected_comments == 3

    def test_report_to_dict(self, campaign_detector, obfuscated_campaign):
        data = campaign_detector.generate_report(obfuscated_campaign).to_dict()

        assert set(data) == {"summary", "campaigns"}
        assert set(data["campaigns"][0]) == {
            "severity", "confidence", "pattern", "comment_count", "authors", "sample", "reasons",
        }
        assert data["campaigns"][0]["severity"] == "HIGH"

    def test_empty_batch(self, campaign_detector):
        report = campaign_detector.generate_report([])

        assert report.campaigns == []
        assert report.summary.total_comments == 0

    def test_entry_copies_reasons(self, campaign_detector, single_author_campaign):
        campaign = campaign_detector.analyze_batch(single_author_campaign).spam_campaigns[0]
        entry = CampaignReportEntry.from_score(campaign)

        assert entry.reasons == list(campaign.signals)
        assert entry.reasons[0] == "Cluster size: 10 comments (+50)"


class TestHasCampaign:

    def test_true_for_campaign(self, campaign_detector, single_author_campaign):
        assert campaign_detector.has_campaign(single_author_campaign) is True

    def test_false_for_genuine_comments(self, campaign_detector):
        comments = [
            {"id": "1", "text": "Mantul", "author": "a"},
            {"id": "2", "text": "Kapan bahas mesin diesel?", "author": "b"},
            {"id": "3", "text": "Musik latarnya terlalu keras sampai suara narator tidak terdengar", "author": "c"},
        ]
        assert campaign_detector.has_campaign(comments) is False

    def test_false_for_missing_batch(self, campaign_detector):
        assert campaign_detector.has_campaign(None) is False

    def test_contextual_reduction_clears_campaign(self, campaign_detector, automotive_video):
        comments = [
            {"id": str(i), "text": "Mantap bang!", "author": f"user{i}"} for i in range(3)
        ]

        assert campaign_detector.has_campaign(comments) is True
        assert campaign_detector.has_campaign(comments, video_context=automotive_video) is False


class TestModuleHelpers:

    def test_default_detector_is_shared(self):
        assert detector_module.get_default_detector() is detector_module.get_default_detector()

    def test_helpers_match_instance(self, single_author_campaign):
        detector = CampaignDetector()
        expected = detector.analyze_batch(single_author_campaign)

        assert detector_module.analyze_batch(single_author_campaign) == expected
        assert detector_module.has_campaign(single_author_campaign) is True
        assert len(detector_module.generate_report(single_author_campaign).campaigns) == 1

    def test_custom_threshold(self, config, obfuscated_campaign):
        detector = CampaignDetector(config.with_overrides(campaign_threshold=85))

        result = detector.analyze_batch(obfuscated_campaign)

        assert result.summary.clusters_found == 1
        assert result.spam_campaigns == []
