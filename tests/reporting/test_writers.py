"""Tests for JSON, CSV, and SARIF writers."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from skillint.model import Evidence, Finding
from skillint.reporting import build_summary, write_skill_reports
from skillint.reporting.csv_writer import render_csv_string
from skillint.reporting.filters import OutputFilters, build_filter_metadata, filter_findings
from skillint.reporting.sarif_writer import build_sarif_envelope


def _finding(finding_id: str, severity: str, rule_id: str, line: int | None = 1) -> Finding:
    return Finding(
        id=finding_id,
        severity=severity,  # type: ignore[arg-type]
        title=f"{rule_id} title",
        description=f"{rule_id} description",
        evidence=Evidence(path="skills/demo/SKILL.md", line=line, snippet="snippet"),
        skill="demo",
        rule_id=rule_id,
        recommendation="fix it",
    )


FINDINGS = [
    _finding("0000000000000003", "info", "SECTION_MISSING", 5),
    _finding("0000000000000001", "error", "LINK_BROKEN", 9),
    _finding("0000000000000002", "warning", "BODY_TOO_LONG", None),
]


def test_build_summary_counts_all_findings() -> None:
    summary = build_summary("demo", FINDINGS, path="skills/demo/SKILL.md", sha256="0" * 64)

    assert summary.status == "fail"
    assert summary.counts_by_severity == {"error": 1, "warning": 1, "info": 1}
    assert summary.counts_by_rule == {"BODY_TOO_LONG": 1, "LINK_BROKEN": 1, "SECTION_MISSING": 1}
    assert [item["rule_id"] for item in summary.top_findings] == ["LINK_BROKEN", "BODY_TOO_LONG", "SECTION_MISSING"]
    assert "shown_finding_count" not in summary.to_dict()


def test_write_skill_reports(tmp_path: Path) -> None:
    skill_md = tmp_path / "skills" / "demo" / "SKILL.md"
    skill_md.parent.mkdir(parents=True)
    skill_md.write_text("---\nname: demo\n---\n", encoding="utf-8")
    out = tmp_path / "out"

    summary = write_skill_reports(out, "demo", FINDINGS, skill_path=skill_md, root=tmp_path)

    written = json.loads((out / "demo" / "findings.json").read_text(encoding="utf-8"))
    assert [item["id"] for item in written] == ["0000000000000001", "0000000000000002", "0000000000000003"]
    assert summary.path == "skills/demo/SKILL.md"
    assert len(summary.sha256) == 64
    assert not [path for path in (out / "demo").iterdir() if path.name.startswith(".tmp-")]


def test_filters_and_metadata() -> None:
    filters = OutputFilters(min_severity="warning")

    shown = filter_findings(FINDINGS, filters)

    assert [finding.rule_id for finding in shown] == ["LINK_BROKEN", "BODY_TOO_LONG"]
    assert build_filter_metadata(total=3, shown=2, filters=filters) == {
        "min_severity": "warning",
        "shown": 2,
        "total": 3,
        "filtered": 1,
    }
    assert build_filter_metadata(total=3, shown=3, filters=OutputFilters()) is None


def test_render_csv_string_orders_by_severity() -> None:
    rows = list(csv.reader(io.StringIO(render_csv_string(FINDINGS))))

    assert rows[0] == ["id", "skill", "rule_id", "severity", "path", "line", "title", "description", "recommendation"]
    assert [row[2] for row in rows[1:]] == ["LINK_BROKEN", "BODY_TOO_LONG", "SECTION_MISSING"]
    assert rows[2][5] == ""


def test_sarif_envelope_levels_and_regions() -> None:
    envelope = build_sarif_envelope(FINDINGS)
    run = envelope["runs"][0]
    results = {result["ruleId"]: result for result in run["results"]}

    assert envelope["version"] == "2.1.0"
    assert run["tool"]["driver"]["name"] == "SKILLINT"
    assert [rule["id"] for rule in run["tool"]["driver"]["rules"]] == ["BODY_TOO_LONG", "LINK_BROKEN", "SECTION_MISSING"]
    assert results["SECTION_MISSING"]["level"] == "note"
    assert results["LINK_BROKEN"]["locations"][0]["physicalLocation"]["region"] == {"startLine": 9}
    assert "region" not in results["BODY_TOO_LONG"]["locations"][0]["physicalLocation"]
    assert run["properties"]["ruleDistribution"] == {"BODY_TOO_LONG": 1, "LINK_BROKEN": 1, "SECTION_MISSING": 1}
    assert "filter" not in run["properties"]
