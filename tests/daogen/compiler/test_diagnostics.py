"""Tests for daogen.compiler.diagnostics."""

from daogen.compiler.diagnostics import Diagnostic, DiagnosticReport


class TestDiagnostic:
    def test_str(self) -> None:
        diagnostic = Diagnostic("InventoryMapper.product_dao(keyspace)", "bad type")
        assert str(diagnostic) == "InventoryMapper.product_dao(keyspace): bad type"
        assert diagnostic.severity == "error"


class TestDiagnosticReport:
    def test_empty_report(self) -> None:
        report = DiagnosticReport()
        assert not report.has_errors
        assert report.diagnostics == []
        assert len(report) == 0

    def test_report_and_warn(self) -> None:
        report = DiagnosticReport()
        report.report("A.b", "error message")
        report.warn("A.c", "warning message")

        assert report.has_errors
        assert len(report) == 2
        assert [d.location for d in report.errors] == ["A.b"]
        assert [d.location for d in report.warnings] == ["A.c"]

    def test_warnings_alone_are_not_errors(self) -> None:
        report = DiagnosticReport()
        report.warn("A.c", "warning message")
        assert not report.has_errors
