from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() not in ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class AppConfig:
    # Input / output
    input_file: str
    output_dir: str
    # Category selection (comma list or JSON file; file wins)
    categories: str | None
    categories_file: str | None
    # Optional download of the input script
    source_url: str | None
    refresh: bool
    fetch_timeout: float
    fetch_verify_ssl: bool
    fetch_user_agent: str | None
    # Exit non-zero when nothing was extracted
    strict: bool
    # Console summary
    summary: bool
    log_level: str


def load_config_from_env() -> AppConfig:
    input_file = os.environ.get("GHPROXY_INPUT_FILE", os.path.join("temp", "ghproxy.user.js"))
    output_dir = os.environ.get("GHPROXY_OUTPUT_DIR", "dist")
    categories = os.environ.get("GHPROXY_CATEGORIES") or None
    categories_file = os.environ.get("GHPROXY_CATEGORIES_FILE") or None

    source_url = os.environ.get("GHPROXY_SOURCE_URL") or None
    refresh = _env_flag("GHPROXY_REFRESH", "0")
    fetch_timeout = float(os.environ.get("GHPROXY_FETCH_TIMEOUT", "15"))
    fetch_verify_ssl = _env_flag("GHPROXY_FETCH_VERIFY_SSL", "1")
    fetch_user_agent = os.environ.get("GHPROXY_FETCH_UA") or None

    strict = _env_flag("GHPROXY_STRICT", "0")
    summary = _env_flag("GHPROXY_SUMMARY", "1")
    log_level = os.environ.get("GHPROXY_LOG_LEVEL", "INFO").upper()

    return AppConfig(
        input_file=input_file,
        output_dir=output_dir,
        categories=categories,
        categories_file=categories_file,
        source_url=source_url,
        refresh=refresh,
        fetch_timeout=fetch_timeout,
        fetch_verify_ssl=fetch_verify_ssl,
        fetch_user_agent=fetch_user_agent,
        strict=strict,
        summary=summary,
        log_level=log_level,
    )
