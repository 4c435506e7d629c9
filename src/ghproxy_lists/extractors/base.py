from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

# Escaped-newline token used inside description fields
NEWLINE_TOKEN = "&#10;"


@dataclass(frozen=True)
class ProxyRecord:
    url: str
    region: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "region": self.region, "description": self.description}


@dataclass(frozen=True)
class ExtractContext:
    array_name: str
    source_path: Optional[str] = None


@dataclass(frozen=True)
class ExtractResult:
    records: List[ProxyRecord]
    found: bool = True  # declaration located
    complete: bool = True  # closing bracket reached


class BaseExtractor(Protocol):
    def extract(self, content: str, *, context: ExtractContext) -> ExtractResult:
        ...
