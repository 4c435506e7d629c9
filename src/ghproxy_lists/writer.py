"""
Output artifacts: one JSON array per category, a combined JSON array tagged with
each record's category, and a tab-separated `type url region` index.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .errors import OutputWriteError
from .extractors import ProxyRecord

COMBINED_JSON = "all_proxies.json"
COMBINED_TXT = "all_proxies.txt"

logger = logging.getLogger("ghproxy.writer")

__all__ = [
    "COMBINED_JSON",
    "COMBINED_TXT",
    "combine_records",
    "ensure_output_dir",
    "write_category",
    "write_combined",
    "write_text_index",
]


def ensure_output_dir(output_dir: str) -> None:
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(output_dir, e) from e


def combine_records(per_category: Mapping[str, Sequence[ProxyRecord]]) -> List[Dict[str, str]]:
    """Flatten per-category records in category order, tagging each with `type`."""
    combined: List[Dict[str, str]] = []
    for category, records in per_category.items():
        for rec in records:
            combined.append({"type": category, **rec.to_dict()})
    return combined


def _write_text(path: str, content: str) -> int:
    data = content.encode("utf-8")
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logger.debug("wrote %s (%d bytes)", path, len(data))
    return len(data)


def _dump(items: Any) -> str:
    return json.dumps(items, indent=2, ensure_ascii=False)


def write_category(output_dir: str, filename: str, records: Sequence[ProxyRecord]) -> Tuple[str, int]:
    path = os.path.join(output_dir, filename)
    return path, _write_text(path, _dump([r.to_dict() for r in records]))


def write_combined(output_dir: str, combined: Sequence[Mapping[str, str]]) -> Tuple[str, int]:
    path = os.path.join(output_dir, COMBINED_JSON)
    return path, _write_text(path, _dump(list(combined)))


def write_text_index(output_dir: str, combined: Sequence[Mapping[str, str]]) -> Tuple[str, int]:
    path = os.path.join(output_dir, COMBINED_TXT)
    lines = [f"{item['type']}\t{item['url']}\t{item['region']}" for item in combined]
    return path, _write_text(path, "\n".join(lines))
