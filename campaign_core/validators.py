"""
Input validation utilities.

Turns loosely-typed caller input (comment dicts, channel/video metadata) into
the engine's data classes. Validators never raise for bad input: malformed
comments are skipped and malformed context fields are ignored one by one.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from campaign_core.models import Comment, VideoContext

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check."""
    is_valid: bool
    error_message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.is_valid


class CommentValidator:
    """Validates and parses raw comment records."""

    DEFAULT_AUTHOR = "Unknown"

    @classmethod
    def validate(cls, raw: Any) -> ValidationResult:
        """
        Validate a raw comment record.

        Args:
            raw: ``Comment`` instance or mapping with ``id``, ``text``, ``author``

        Returns:
            ValidationResult with is_valid and optional error message
        """
        if isinstance(raw, Comment):
            text = raw.text
        elif isinstance(raw, Mapping):
            text = raw.get("text")
        else:
            return ValidationResult(False, f"Unsupported comment type: {type(raw).__name__}")

        if text is None:
            return ValidationResult(False, "Comment has no text")
        if not isinstance(text, str):
            return ValidationResult(False, f"Comment text is not a string: {type(text).__name__}")
        if not text.strip():
            return ValidationResult(False, "Comment text is empty")

        return ValidationResult(True)

    @classmethod
    def parse(cls, raw: Any, index: int) -> Optional[Comment]:
        """
        Parse a raw comment record into a ``Comment``.

        Args:
            raw: Comment record
            index: Position in the batch, used for the fallback id

        Returns:
            Comment, or None if the record has no usable text
        """
        result = cls.validate(raw)
        if not result:
            logger.debug(f"Skipping comment at index {index}: {result.error_message}")
            return None

        if isinstance(raw, Comment):
            return raw

        comment_id = raw.get("id")
        author = raw.get("author")

        return Comment(
            id=str(comment_id) if comment_id not in (None, "") else f"comment_{index}",
            text=raw["text"],
            author=str(author) if author not in (None, "") else cls.DEFAULT_AUTHOR,
        )

    @classmethod
    def parse_batch(cls, raw_comments: Iterable[Any]) -> List[Tuple[int, Comment]]:
        """
        Parse a batch, keeping the original position of each usable comment.

        Returns:
            List of (index, Comment) pairs
        """
        parsed = []
        for index, raw in enumerate(raw_comments):
            comment = cls.parse(raw, index)
            if comment is not None:
                parsed.append((index, comment))
        return parsed


class ContextValidator:
    """Validates channel/video metadata and merges it into a ``VideoContext``."""

    TEXT_FIELDS = ("title", "description", "category")

    @classmethod
    def parse(cls, raw: Any, title_key: str = "title") -> Dict[str, Any]:
        """
        Extract the usable fields of a context mapping.

        Args:
            raw: Channel or video metadata
            title_key: Key holding the title (channels use ``name``)

        Returns:
            Dict with only the well-formed fields present
        """
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            logger.debug(f"Ignoring context of type {type(raw).__name__}")
            return {}

        parsed: Dict[str, Any] = {}
        for field_name in cls.TEXT_FIELDS:
            key = title_key if field_name == "title" else field_name
            value = raw.get(key)
            if isinstance(value, str) and value.strip():
                parsed[field_name] = value.strip()
            elif value is not None and not isinstance(value, str):
                logger.debug(f"Ignoring non-string context field '{key}'")

        tags = raw.get("tags")
        if isinstance(tags, (list, tuple)):
            parsed["tags"] = [tag.strip() for tag in tags if isinstance(tag, str) and tag.strip()]
        elif tags is not None:
            logger.debug("Ignoring context tags that are not a list")

        return parsed

    @classmethod
    def build_context(
        cls,
        channel_context: Optional[Mapping[str, Any]] = None,
        video_context: Optional[Mapping[str, Any]] = None,
    ) -> Optional[VideoContext]:
        """
        Merge video metadata over channel metadata.

        Non-empty video fields override channel fields; tags from both are
        concatenated without duplicates.

        Returns:
            VideoContext, or None when neither context was supplied
        """
        if channel_context is None and video_context is None:
            return None

        channel = cls.parse(channel_context, title_key="name")
        video = cls.parse(video_context, title_key="title")

        tags: List[str] = []
        for tag in channel.get("tags", []) + video.get("tags", []):
            if tag not in tags:
                tags.append(tag)

        return VideoContext(
            title=video.get("title", channel.get("title", "")),
            description=video.get("description", channel.get("description", "")),
            category=video.get("category", channel.get("category", "")),
            tags=tuple(tags),
        )
