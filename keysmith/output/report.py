"""
Keysmith Report Generator
==========================

Writes analysis results as JSON for scripting and CI use. Reports are
built from :class:`~shared.models.ScanResult` objects, whose target is
always a placeholder, so a report never contains the analysed password.
Generated passwords have no report path at all.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from shared.models import ScanResult


class KeysmithReportGenerator:
    """Serialises scan results.

    Usage::

        generator = KeysmithReportGenerator()
        generator.generate_json(scan_result, Path("report.json"))
    """

    def __init__(self, version: str = "1.0.0") -> None:
        self.version = version

    def build(self, result: ScanResult) -> dict[str, Any]:
        """Report document for *result* as a JSON-compatible dict."""
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": result.tool_name,
                "target": result.target,
                "version": self.version,
            },
            "summary": {
                "total_findings": result.finding_count,
                "severity_counts": result.severity_counts,
                "highest_severity": (
                    result.highest_severity.value if result.highest_severity else None
                ),
                "duration_seconds": result.duration_seconds,
                "description": result.summary,
            },
            "findings": [f.model_dump(mode="json") for f in result.findings],
            "analysis": result.metadata,
        }

    def render_json(self, result: ScanResult) -> str:
        return json.dumps(self.build(result), indent=2, ensure_ascii=False, default=str)

    def generate_json(self, result: ScanResult, output_path: Path) -> Path:
        """Write the JSON report to *output_path* and return the path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(result), encoding="utf-8")
        return output_path
