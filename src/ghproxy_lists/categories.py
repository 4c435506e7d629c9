from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from .errors import CategoryError, InputReadError
from .writer import COMBINED_JSON, COMBINED_TXT

DEFAULT_CATEGORY_NAMES = (
    "download_url_us",
    "clone_url",
    "clone_ssh_url",
    "raw_url",
    "download_url",
)


@dataclass(frozen=True)
class CategorySpec:
    name: str
    filename: str = ""

    @property
    def output_filename(self) -> str:
        return self.filename or f"{self.name}.json"


def default_categories() -> List[CategorySpec]:
    return [CategorySpec(name=n) for n in DEFAULT_CATEGORY_NAMES]


def normalize_categories(items: Union[Sequence[Any], Mapping[str, Any]]) -> List[CategorySpec]:
    """
    Accepts names, {"name", "filename"} dicts, or a mapping of name -> filename.
    Blank and repeated names are dropped; first occurrence order is kept.
    """
    if isinstance(items, Mapping):
        items = [{"name": k, "filename": v} for k, v in items.items()]
    result: List[CategorySpec] = []
    seen = set()
    for it in items or []:
        if isinstance(it, str):
            name, filename = it.strip(), ""
        elif isinstance(it, dict):
            name = str(it.get("name", "")).strip()
            filename = str(it.get("filename") or "").strip()
        else:
            continue
        if not name or name in seen:
            continue
        seen.add(name)
        result.append(CategorySpec(name=name, filename=filename))
    return result


def parse_category_list(value: Optional[str]) -> List[CategorySpec]:
    """Comma-separated names, e.g. 'clone_url,raw_url'."""
    return normalize_categories((value or "").split(","))


def load_categories_file(path: str) -> List[CategorySpec]:
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except (OSError, ValueError) as e:
        raise InputReadError(path, e) from e
    if not isinstance(data, (list, dict)):
        raise InputReadError(path, "expected a JSON list or object")
    return normalize_categories(data)


def validate_categories(specs: Sequence[CategorySpec]) -> None:
    """Output filenames must be plain names inside the output dir, unique, and not a combined artifact."""
    reserved = {COMBINED_JSON, COMBINED_TXT}
    taken = {}
    for spec in specs:
        filename = spec.output_filename
        if "/" in filename or "\\" in filename or filename in (".", ".."):
            raise CategoryError(spec.name, f"filename {filename!r} is not a plain file name")
        if filename in reserved:
            raise CategoryError(spec.name, f"filename {filename!r} is reserved for combined output")
        if filename in taken:
            raise CategoryError(spec.name, f"filename {filename!r} already used by {taken[filename]}")
        taken[filename] = spec.name
