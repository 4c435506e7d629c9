from __future__ import annotations

import argparse
import logging
import os

from .config import load_config_from_env
from .errors import GhproxyError
from .pipeline import run_extraction
from .status import log_summary

logger = logging.getLogger("ghproxy.main")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_EMPTY = 2


def _parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    CLI to override environment variables. Precedence: CLI > env > defaults.
    Running with no arguments uses env/defaults only.
    """
    ap = argparse.ArgumentParser(
        prog="ghproxy-lists",
        description="Extract proxy endpoint arrays from the userscript and write JSON/text lists.",
    )
    # Only set values when flags are provided (no default), so env/defaults remain if omitted.
    ap.add_argument("--input", "-i", dest="input_file", help="Override GHPROXY_INPUT_FILE (default temp/ghproxy.user.js)")
    ap.add_argument("--output-dir", "-o", dest="output_dir", help="Override GHPROXY_OUTPUT_DIR (default dist)")
    ap.add_argument("--categories", dest="categories", help="Override GHPROXY_CATEGORIES (comma-separated array names)")
    ap.add_argument("--categories-file", dest="categories_file", help="Override GHPROXY_CATEGORIES_FILE (JSON list or name->filename object)")
    ap.add_argument("--source-url", dest="source_url", help="Override GHPROXY_SOURCE_URL (download the script when the input is missing)")
    ap.add_argument("--refresh", dest="refresh", action="store_const", const="1", help="Always re-download from --source-url")
    ap.add_argument("--strict", dest="strict", action="store_const", const="1", help="Exit with code 2 when no records were extracted")
    ap.add_argument("--no-summary", dest="summary", action="store_const", const="0", help="Skip the colored end-of-run summary")
    ap.add_argument("--log-level", dest="log_level", help="Override GHPROXY_LOG_LEVEL (e.g., DEBUG, INFO)")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    # Parse CLI and map provided flags to environment variables before loading config.
    args = _parse_cli_args(argv)
    cli_to_env = {
        "input_file": "GHPROXY_INPUT_FILE",
        "output_dir": "GHPROXY_OUTPUT_DIR",
        "categories": "GHPROXY_CATEGORIES",
        "categories_file": "GHPROXY_CATEGORIES_FILE",
        "source_url": "GHPROXY_SOURCE_URL",
        "refresh": "GHPROXY_REFRESH",
        "strict": "GHPROXY_STRICT",
        "summary": "GHPROXY_SUMMARY",
        "log_level": "GHPROXY_LOG_LEVEL",
    }
    for attr, env_key in cli_to_env.items():
        if getattr(args, attr, None) is not None:
            os.environ[env_key] = str(getattr(args, attr))

    cfg = load_config_from_env()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug(
        "config: input='%s' output_dir='%s' categories=%s categories_file=%s source_url=%s strict=%s",
        cfg.input_file,
        cfg.output_dir,
        cfg.categories,
        cfg.categories_file,
        cfg.source_url,
        cfg.strict,
    )

    try:
        report = run_extraction(cfg)
    except (GhproxyError, OSError) as e:
        logger.error("run failed: %s", e)
        return EXIT_FATAL

    if cfg.summary:
        log_summary(report)
    if cfg.strict and report.combined_total == 0:
        logger.error("no records extracted from %s", cfg.input_file)
        return EXIT_EMPTY
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
