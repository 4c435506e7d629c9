from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .categories import (
    DEFAULT_CATEGORY_NAMES,
    CategorySpec,
    default_categories,
    load_categories_file,
    parse_category_list,
    validate_categories,
)
from .config import AppConfig, load_config_from_env
from .errors import InputReadError
from .extractors import ArrayLiteralExtractor, ExtractContext, ExtractResult, ProxyRecord
from .fetch import fetch_script
from .writer import combine_records, ensure_output_dir, write_category, write_combined, write_text_index

logger = logging.getLogger("ghproxy.pipeline")


@dataclass(frozen=True)
class CategoryOutcome:
    name: str
    count: int
    found: bool
    complete: bool
    output_file: str
    failed: bool = False


@dataclass
class RunReport:
    input_file: str
    output_dir: str
    categories: List[CategoryOutcome] = field(default_factory=list)
    combined_total: int = 0
    output_files: Dict[str, int] = field(default_factory=dict)  # path -> bytes
    fetched: bool = False
    elapsed: float = 0.0

    @property
    def total(self) -> int:
        return sum(c.count for c in self.categories)


def resolve_categories(cfg: AppConfig) -> List[CategorySpec]:
    if cfg.categories_file:
        cats = load_categories_file(cfg.categories_file)
    elif cfg.categories:
        cats = parse_category_list(cfg.categories)
    else:
        cats = default_categories()
    if not cats:
        logger.warning("categories: none configured, using defaults (%s)", ",".join(DEFAULT_CATEGORY_NAMES))
        return default_categories()
    validate_categories(cats)
    return cats


def read_source(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(path, e) from e


def extract_category(content: str, spec: CategorySpec, *, source_path: Optional[str] = None) -> ExtractResult:
    extractor = ArrayLiteralExtractor()
    return extractor.extract(content, context=ExtractContext(array_name=spec.name, source_path=source_path))


def run_extraction(config: Optional[AppConfig] = None) -> RunReport:
    """
    One pass:
    - Fetch the script when a source URL is set and the input is missing (or refresh is on)
    - Read the script once
    - Extract each category independently
    - Write per-category JSON, combined JSON and the text index
    """
    cfg = config or load_config_from_env()
    t0 = time.perf_counter()
    report = RunReport(input_file=cfg.input_file, output_dir=cfg.output_dir)

    if cfg.source_url and (cfg.refresh or not os.path.isfile(cfg.input_file)):
        fetch_script(
            cfg.source_url,
            cfg.input_file,
            timeout=cfg.fetch_timeout,
            verify_ssl=cfg.fetch_verify_ssl,
            user_agent=cfg.fetch_user_agent,
        )
        report.fetched = True

    content = read_source(cfg.input_file)
    categories = resolve_categories(cfg)
    logger.info("extract: input='%s' (%d chars) categories=%s", cfg.input_file, len(content), ",".join(c.name for c in categories))

    ensure_output_dir(cfg.output_dir)

    per_category: Dict[str, List[ProxyRecord]] = {}
    for spec in categories:
        failed = False
        try:
            res = extract_category(content, spec, source_path=cfg.input_file)
        except Exception as e:
            # One broken category must not block the others
            logger.exception("extract: %s failed: %s", spec.name, e)
            res = ExtractResult(records=[], found=False, complete=False)
            failed = True
        if not failed and not res.found:
            logger.warning("extract: array %s not found", spec.name)
        elif not failed and not res.complete:
            logger.warning("extract: array %s is not terminated; kept %d records", spec.name, len(res.records))

        path, size = write_category(cfg.output_dir, spec.output_filename, res.records)
        report.output_files[path] = size
        per_category[spec.name] = list(res.records)
        report.categories.append(
            CategoryOutcome(
                name=spec.name,
                count=len(res.records),
                found=res.found,
                complete=res.complete,
                output_file=path,
                failed=failed,
            )
        )
        logger.info("extract: %s done, %d records", spec.name, len(res.records))

    combined = combine_records(per_category)
    report.combined_total = len(combined)
    for path, size in (write_combined(cfg.output_dir, combined), write_text_index(cfg.output_dir, combined)):
        report.output_files[path] = size

    report.elapsed = time.perf_counter() - t0
    logger.info("extract: all done, %d records total -> %s", report.combined_total, cfg.output_dir)
    return report
