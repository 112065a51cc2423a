"""
Accuracy evaluation against labelled comment fixtures.

A fixture is a JSON file of the form::

    {"comments": [{"id": "1", "text": "...", "author": "...", "expected_result": "spam"}]}

Every comment that ends up in an emitted campaign counts as flagged. An
expected result of ``"spam"`` is a positive; anything else is a negative.

Usage:
    python evaluation.py fixtures/sample.json --export results.xlsx
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from campaign_core.constants import APP_NAME, Severity
from campaign_core.models import BatchResult
from campaign_detector import CampaignDetector, get_default_detector

logger = logging.getLogger(__name__)

POSITIVE_LABEL = "spam"

RESULT_COLUMNS = [
    "Comment ID",
    "Author",
    "Comment Text",
    "Expected",
    "Flagged",
    "Campaign Score",
    "Severity",
    "Outcome",
]


class FixtureError(Exception):
    """Raised when a fixture file cannot be read."""
    pass


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class ConfusionMatrix:
    """Binary classification counts; metrics are percentages."""
    tp: int = 0
    fp: int = 0
    tn: int = 0
    fn: int = 0

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    @property
    def precision(self) -> float:
        flagged = self.tp + self.fp
        return round(self.tp / flagged * 100, 2) if flagged else 0.0

    @property
    def recall(self) -> float:
        positives = self.tp + self.fn
        return round(self.tp / positives * 100, 2) if positives else 0.0

    @property
    def f1(self) -> float:
        if self.precision + self.recall == 0:
            return 0.0
        return round(2 * self.precision * self.recall / (self.precision + self.recall), 2)

    @property
    def accuracy(self) -> float:
        return round((self.tp + self.tn) / self.total * 100, 2) if self.total else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "True Positives": self.tp,
            "False Positives": self.fp,
            "True Negatives": self.tn,
            "False Negatives": self.fn,
            "Precision (%)": self.precision,
            "Recall (%)": self.recall,
            "F1 (%)": self.f1,
            "Accuracy (%)": self.accuracy,
        }


@dataclass
class EvaluationResult:
    """Per-comment outcomes plus aggregate metrics for one fixture run."""
    frame: pd.DataFrame
    matrix: ConfusionMatrix
    batch: BatchResult = field(default_factory=BatchResult)

    def campaigns_frame(self) -> pd.DataFrame:
        rows = []
        for campaign in self.batch.spam_campaigns:
            rows.append({
                "Severity": Severity.from_score(campaign.score).value,
                "Score": campaign.score,
                "Template": campaign.template,
                "Comments": campaign.member_count,
                "Authors": ", ".join(campaign.authors),
                "Sample": campaign.sample_text,
                "Signals": "; ".join(campaign.signals),
            })
        return pd.DataFrame(rows)

    def metrics_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"Metric": name, "Value": value} for name, value in self.matrix.to_dict().items()]
        )


# =============================================================================
# FIXTURES & EVALUATION
# =============================================================================

def load_fixture(path: str) -> List[Dict[str, Any]]:
    """
    Load the comments of a fixture file.

    Raises:
        FixtureError: If the file is missing or not a valid fixture
    """
    fixture_path = Path(path)
    if not fixture_path.exists():
        raise FixtureError(f"Fixture file not found: {path}")

    try:
        with open(fixture_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FixtureError(f"Failed to parse fixture: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise FixtureError(f"Failed to read fixture: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("comments"), list):
        raise FixtureError("Fixture must be an object with a 'comments' list")

    return data["comments"]


def evaluate(
    comments: List[Mapping[str, Any]],
    detector: Optional[CampaignDetector] = None,
    channel_context: Optional[Mapping[str, Any]] = None,
    video_context: Optional[Mapping[str, Any]] = None,
) -> EvaluationResult:
    """
    Run campaign detection over labelled comments and score the outcome.

    Args:
        comments: Fixture comments with ``expected_result`` labels
        detector: Detector to evaluate (defaults to the shared instance)

    Returns:
        EvaluationResult with a per-comment DataFrame and confusion matrix
    """
    detector = detector or get_default_detector()
    batch = detector.analyze_batch(comments, channel_context, video_context)

    scores: Dict[str, int] = {}
    for campaign in batch.spam_campaigns:
        for comment_id in campaign.comment_ids:
            scores[comment_id] = campaign.score

    matrix = ConfusionMatrix()
    rows = []
    for index, comment in enumerate(comments):
        if not isinstance(comment, Mapping):
            continue

        comment_id = comment.get("id")
        comment_id = str(comment_id) if comment_id not in (None, "") else f"comment_{index}"
        expected = str(comment.get("expected_result", "unknown")).lower()
        flagged = comment_id in scores
        is_positive = expected == POSITIVE_LABEL

        if flagged and is_positive:
            matrix.tp += 1
            outcome = "TP"
        elif flagged:
            matrix.fp += 1
            outcome = "FP"
        elif is_positive:
            matrix.fn += 1
            outcome = "FN"
        else:
            matrix.tn += 1
            outcome = "TN"

        score = scores.get(comment_id, 0)
        rows.append({
            "Comment ID": comment_id,
            "Author": comment.get("author") or "Unknown",
            "Comment Text": comment.get("text", ""),
            "Expected": expected,
            "Flagged": flagged,
            "Campaign Score": score,
            "Severity": Severity.from_score(score).value if flagged else "",
            "Outcome": outcome,
        })

    logger.info(
        f"Evaluated {matrix.total} comments: precision {matrix.precision}%, "
        f"recall {matrix.recall}%, accuracy {matrix.accuracy}%"
    )
    return EvaluationResult(frame=pd.DataFrame(rows, columns=RESULT_COLUMNS), matrix=matrix, batch=batch)


# =============================================================================
# EXPORT
# =============================================================================

def save_to_csv(result: EvaluationResult, base_filename: str) -> str:
    """
    Save evaluation results to CSV files.

    Creates separate files for comments, campaigns and metrics.

    Returns:
        The base filename used
    """
    # UTF-8 BOM so spreadsheet apps detect the encoding
    encoding = "utf-8-sig"

    result.frame.to_csv(f"{base_filename}_comments.csv", index=False, encoding=encoding)

    campaigns = result.campaigns_frame()
    if not campaigns.empty:
        campaigns.to_csv(f"{base_filename}_campaigns.csv", index=False, encoding=encoding)

    result.metrics_frame().to_csv(f"{base_filename}_metrics.csv", index=False, encoding=encoding)

    return base_filename


def save_to_excel(result: EvaluationResult, filename: str) -> str:
    """Save evaluation results to an Excel file with one sheet per table."""
    with pd.ExcelWriter(filename, engine="openpyxl") as writer:
        result.frame.to_excel(writer, sheet_name="Comments", index=False)

        campaigns = result.campaigns_frame()
        if not campaigns.empty:
            campaigns.to_excel(writer, sheet_name="Campaigns", index=False)

        result.metrics_frame().to_excel(writer, sheet_name="Metrics", index=False)

    return filename


# =============================================================================
# COMMAND LINE
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evaluation",
        description=f"{APP_NAME}: measure detection accuracy on a labelled fixture",
    )
    parser.add_argument("fixture", help="JSON fixture with a 'comments' list")
    parser.add_argument(
        "--export",
        metavar="FILE",
        help="Write results to FILE (.xlsx for Excel, anything else as CSV base name)",
    )
    parser.add_argument("--video-title", default=None, help="Video title used as context")
    parser.add_argument("--video-category", default=None, help="Video category used as context")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        comments = load_fixture(args.fixture)
    except FixtureError as e:
        logger.error(str(e))
        return 1

    if not comments:
        logger.error("No comments found in fixture")
        return 1

    video_context = None
    if args.video_title or args.video_category:
        video_context = {"title": args.video_title or "", "category": args.video_category or ""}

    result = evaluate(comments, video_context=video_context)
    summary = result.batch.summary

    print(f"Loaded {len(comments)} comments from {args.fixture}")
    print(f"Clusters: {summary.clusters_found}  Campaigns: {summary.spam_campaigns}  "
          f"Flagged: {summary.affected_comments}")
    for name, value in result.matrix.to_dict().items():
        print(f"{name}: {value}")

    if args.export:
        if args.export.lower().endswith(".xlsx"):
            save_to_excel(result, args.export)
        else:
            save_to_csv(result, args.export)
        print(f"Results exported to {args.export}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
