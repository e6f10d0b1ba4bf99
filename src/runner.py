"""Run the Timecop check over the Ruby files of a directory tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from edits.apply import apply_edits_bytes
from parse.ruby import SourceParseError, parse_ruby_source
from report.models import FileReport
from rules.config import load_config
from rules.timecop import check_tree
from scan.files import find_ruby_files

if TYPE_CHECKING:
    from pathlib import Path

    from report.models import CheckResult
    from rules.config import TimecopConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    reports: tuple[FileReport, ...] = field(default_factory=tuple)
    failed: tuple[str, ...] = field(default_factory=tuple)

    @property
    def offense_count(self) -> int:
        return sum(len(report.diagnostics) for report in self.reports)

    @property
    def corrected_count(self) -> int:
        return sum(report.corrected for report in self.reports)


def _check_bytes(source_bytes: bytes) -> CheckResult:
    tree = parse_ruby_source(source_bytes, strict=True)
    return check_tree(tree, source_bytes)


def check_file(path: Path, relative_path: str, *, fix: bool = False) -> FileReport:
    """Check one file, rewriting it in place when ``fix`` is set.

    Raises:
        OSError: If the file cannot be read or written.
        SourceParseError: If the file is not valid Ruby.
    """
    source_bytes = path.read_bytes()
    result = _check_bytes(source_bytes)

    if not fix or not result.edits:
        return FileReport(path=relative_path, diagnostics=result.diagnostics)

    corrected = apply_edits_bytes(source_bytes, result.edits)
    remaining = _check_bytes(corrected)
    path.write_bytes(corrected)
    logger.info("Corrected %d offense(s) in %s", len(result.edits), relative_path)

    return FileReport(
        path=relative_path,
        diagnostics=remaining.diagnostics,
        corrected=len(result.edits),
    )


def run_check(
    root: Path,
    *,
    config: TimecopConfig | None = None,
    fix: bool = False,
) -> RunResult:
    """Check every Ruby file under ``root``.

    Files that cannot be read or parsed are logged and listed in
    ``RunResult.failed``; they never stop the run.
    """
    if config is None:
        config = load_config(root)

    reports: list[FileReport] = []
    failed: list[str] = []
    for path in find_ruby_files(
        root,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        relative_path = path.relative_to(root).as_posix()
        try:
            reports.append(check_file(path, relative_path, fix=fix))
        except (OSError, SourceParseError) as e:
            logger.error("Failed to check %s: %s", relative_path, e)
            failed.append(relative_path)

    return RunResult(reports=tuple(reports), failed=tuple(failed))


__all__ = ["RunResult", "check_file", "run_check"]
