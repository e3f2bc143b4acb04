"""Tests for console and JSON report output."""

from __future__ import annotations

import json

from shared.console import KeysmithConsole

from keysmith.core.models import GenerationOptions
from keysmith.output.console import KeysmithConsoleOutput
from keysmith.output.report import KeysmithReportGenerator


def _recording_output() -> KeysmithConsoleOutput:
    return KeysmithConsoleOutput(KeysmithConsole(record=True))


def test_display_analysis(engine):
    output = _recording_output()
    output.display_analysis(engine.analyze("qwerty123"))
    text = output.console.rich.export_text()
    assert "Password Analysis" in text
    assert "VERY WEAK" in text
    assert "Common keyboard patterns or dictionary words" in text
    assert "qwerty123" not in text


def test_display_passwords(engine):
    options = GenerationOptions(length=12)
    alphabet = engine.build_alphabet(options)
    batch = engine.generate_many(options, 2)
    output = _recording_output()
    output.display_passwords(batch, alphabet, "Strong")
    text = output.console.rich.export_text()
    assert "Generation Details" in text
    for pw in batch:
        assert pw.value in text


def test_report_document(engine):
    reporter = KeysmithReportGenerator(version="9.9.9")
    document = reporter.build(engine.assess("aaaaaaaa"))
    assert set(document) == {"report_metadata", "summary", "findings", "analysis"}
    assert document["report_metadata"]["tool"] == "keysmith"
    assert document["report_metadata"]["version"] == "9.9.9"
    assert document["summary"]["severity_counts"]["CRITICAL"] == 1
    assert document["summary"]["highest_severity"] == "CRITICAL"
    assert document["analysis"]["alphabet_size"] == 1


def test_generate_json_writes_file(engine, tmp_path):
    reporter = KeysmithReportGenerator()
    path = reporter.generate_json(engine.assess("Tr0ub4dor&3"), tmp_path / "out" / "r.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["report_metadata"]["target"] == "[password]"


def test_report_without_findings_has_no_highest_severity():
    from shared.models import ScanResult

    result = ScanResult(tool_name="keysmith", target="[password]").finalize()
    document = KeysmithReportGenerator().build(result)
    assert document["summary"]["highest_severity"] is None
    assert document["summary"]["total_findings"] == 0
