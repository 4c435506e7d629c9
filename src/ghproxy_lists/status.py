from __future__ import annotations

import logging
import os
from typing import List

from colorama import Fore, Style, init as colorama_init

from .pipeline import CategoryOutcome, RunReport

colorama_init(autoreset=True)
logger = logging.getLogger("ghproxy.status")

__all__ = [
    "humanize_bytes",
    "humanize_duration",
    "log_summary",
    "render_summary",
]


def humanize_bytes(n: int) -> str:
    try:
        n = int(n)
    except Exception:
        return "0B"
    units = ["B", "KB", "MB", "GB", "TB"]
    f = float(n)
    u = 0
    while f >= 1024.0 and u < len(units) - 1:
        f /= 1024.0
        u += 1
    if u == 0:
        return f"{int(f)}{units[u]}"
    return f"{f:.1f}{units[u]}"


def humanize_duration(seconds: float) -> str:
    try:
        s = float(seconds)
    except Exception:
        s = 0.0
    s = max(0.0, s)
    if s < 1.0:
        return f"{int(s * 1000)}ms"
    m, s = divmod(int(round(s)), 60)
    h, m = divmod(m, 60)
    if h:
        return f"{h}h{m}m{s}s"
    if m:
        return f"{m}m{s}s"
    return f"{s}s"


def _category_line(c: CategoryOutcome) -> str:
    if c.failed:
        state = Fore.RED + "FAILED" + Style.RESET_ALL
    elif not c.found:
        state = Fore.YELLOW + "missing" + Style.RESET_ALL
    elif not c.complete:
        state = Fore.YELLOW + "unterminated" + Style.RESET_ALL
    else:
        state = Fore.GREEN + "ok" + Style.RESET_ALL
    return f"{Fore.CYAN}{c.name}{Style.RESET_ALL}={c.count} {state} -> {os.path.basename(c.output_file)}"


def render_summary(report: RunReport) -> List[str]:
    lines = [_category_line(c) for c in report.categories]
    written = sum(report.output_files.values())
    total_color = Fore.GREEN if report.combined_total else Fore.RED
    lines.append(
        f"{Fore.MAGENTA}total{Style.RESET_ALL}={total_color}{report.combined_total}{Style.RESET_ALL} "
        f"| {Fore.BLUE}files{Style.RESET_ALL}={len(report.output_files)} size={humanize_bytes(written)} "
        f"| dir={report.output_dir} "
        f"| took={humanize_duration(report.elapsed)}"
        + (" (fetched)" if report.fetched else "")
    )
    return lines


def log_summary(report: RunReport) -> None:
    for line in render_summary(report):
        logger.info(line)
