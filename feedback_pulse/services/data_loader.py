"""Feedback dataset loading routines.

Updates:
    v0.1.0 - 2024-06-10 - Added JSON loader producing feedback records.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

from ..core.errors import FeedbackDataError
from ..core.feedback_repository import FeedbackRecord

logger = logging.getLogger(__name__)


def load_feedback_file(path: Path | str) -> List[FeedbackRecord]:
    """Load feedback records from a JSON file.

    The document is either a list of record objects or an object with a
    ``feedback`` list. Record fields are not validated.

    Args:
        path (Path | str): Location of the JSON document.

    Returns:
        list[FeedbackRecord]: Records in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        FeedbackDataError: If the document is not valid JSON of the expected shape.
    """

    dataset_path = Path(path)
    with dataset_path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise FeedbackDataError(f"Invalid JSON in {dataset_path}: {exc}") from exc

    records = parse_feedback_payload(data)
    logger.debug(
        "feedback_file_loaded",
        extra={"path": str(dataset_path), "record_count": len(records)},
    )
    return records


def parse_feedback_payload(data: Any) -> List[FeedbackRecord]:
    """Convert a decoded JSON document into feedback records.

    Raises:
        FeedbackDataError: If the document or one of its entries has the wrong shape.
    """

    if isinstance(data, dict):
        data = data.get("feedback")
    if not isinstance(data, list):
        raise FeedbackDataError("Feedback dataset is not a list of objects")

    records: List[FeedbackRecord] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise FeedbackDataError(f"Feedback entry {index} is not an object")
        records.append(FeedbackRecord.from_dict(item))
    return records


__all__ = ["load_feedback_file", "parse_feedback_payload"]
