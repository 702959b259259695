"""Report writers and the stdout reporter."""

from .filters import OutputFilters, build_filter_metadata, filter_findings
from .stdout import StdoutReporter
from .writer import build_summary, write_corpus_reports, write_skill_reports

__all__ = [
    "OutputFilters",
    "StdoutReporter",
    "build_filter_metadata",
    "build_summary",
    "filter_findings",
    "write_corpus_reports",
    "write_skill_reports",
]
