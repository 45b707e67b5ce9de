"""Tests for the command-line interface."""

import json
from datetime import date, timedelta

import pytest
import typer
from typer.testing import CliRunner

from periodhub.cli import app, parse_date
from periodhub.services.storage import JournalStorage

runner = CliRunner()


class TestParseDate:
    """Tests for parse_date."""

    def test_defaults_to_today(self):
        """Test None and 'today'."""
        assert parse_date(None) == date.today()
        assert parse_date("Today") == date.today()

    def test_relative(self):
        """Test 'yesterday' and -N."""
        assert parse_date("yesterday") == date.today() - timedelta(days=1)
        assert parse_date("-7") == date.today() - timedelta(days=7)

    def test_iso(self):
        """Test an ISO date."""
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    def test_invalid(self):
        """Test that garbage exits."""
        with pytest.raises(typer.Exit):
            parse_date("next week")


class TestJournalCommands:
    """Tests for journal commands."""

    def test_log_symptom(self, data_env):
        """Test adding and listing a symptom entry."""
        result = runner.invoke(app, ["log-symptom", "--pain", "5", "--date", "-2", "-s", "cramps", "--mood", "low"])
        assert result.exit_code == 0, result.output
        assert "Saved symptom entry" in result.output

        listing = runner.invoke(app, ["symptoms"])
        assert listing.exit_code == 0
        assert "5/10" in listing.output

    def test_log_symptom_future(self, data_env):
        """Test that a future date fails."""
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        result = runner.invoke(app, ["log-symptom", "--pain", "5", "--date", tomorrow])
        assert result.exit_code == 1
        assert "future" in result.output

    def test_empty_lists(self, data_env):
        """Test listing commands on an empty journal."""
        assert "No symptom entries yet" in runner.invoke(app, ["symptoms"]).output
        assert "No pain records yet" in runner.invoke(app, ["pain"]).output
        assert "No progress entries yet" in runner.invoke(app, ["stress"]).output

    def test_log_pain_duplicate(self, data_env):
        """Test the one-record-per-day rule and overwrite."""
        args = ["log-pain", "--pain", "6", "--date", "-1", "--time", "08:00", "--medication", "ibuprofen"]
        first = runner.invoke(app, args)
        assert first.exit_code == 0, first.output
        assert "Consider rating" in first.output

        second = runner.invoke(app, args)
        assert second.exit_code == 1
        assert "already exists" in second.output

        third = runner.invoke(app, args + ["--overwrite", "-e", "8"])
        assert third.exit_code == 0

    def test_log_pain_invalid(self, data_env):
        """Test validation errors are printed."""
        result = runner.invoke(app, ["log-pain", "--pain", "6", "--date", "-1", "--time", "8am"])
        assert result.exit_code == 1
        assert "HH:MM" in result.output

    def test_pain_csv(self, data_env, tmp_path):
        """Test writing the CSV export."""
        runner.invoke(app, ["log-pain", "--pain", "4", "--date", "-3", "--time", "07:30"])
        target = tmp_path / "pain.csv"
        result = runner.invoke(app, ["pain", "--csv", str(target)])
        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8").startswith("Date,Pain Level")

    def test_delete_and_prune(self, data_env):
        """Test deleting and pruning entries."""
        for days in ("-3", "-2", "-1"):
            runner.invoke(app, ["log-symptom", "--pain", "3", "--date", days])

        with JournalStorage() as storage:
            ids = [e.id for e in storage.list_symptom_entries()]

        assert runner.invoke(app, ["delete", "symptom_entries", ids[0]]).exit_code == 0
        assert runner.invoke(app, ["delete", "symptom_entries", ids[0]]).exit_code == 1

        result = runner.invoke(app, ["prune", "symptom_entries", "1", "--yes"])
        assert result.exit_code == 0
        assert "1 remaining" in result.output

    def test_prune_needs_confirmation(self, data_env):
        """Test that declining the prompt aborts."""
        runner.invoke(app, ["log-symptom", "--pain", "3", "--date", "-1"])
        result = runner.invoke(app, ["prune", "symptom_entries", "1"], input="n\n")
        assert result.exit_code == 1
        with JournalStorage() as storage:
            assert len(storage.list_symptom_entries()) == 1

    def test_log_stress(self, data_env):
        """Test logging stress and the statistics panel."""
        result = runner.invoke(app, ["log-stress", "--stress", "6", "--mood", "5", "-t", "yoga", "--date", "-1"])
        assert result.exit_code == 0, result.output
        listing = runner.invoke(app, ["stress"])
        assert "Entries: 1" in listing.output

    def test_log_stress_out_of_range(self, data_env):
        """Test an invalid stress level."""
        result = runner.invoke(app, ["log-stress", "--stress", "0", "--mood", "5"])
        assert result.exit_code == 1


class TestQuestionnaireCommands:
    """Tests for the interactive PHQ-9."""

    def test_phq9(self, data_env):
        """Test answering all questions."""
        result = runner.invoke(app, ["phq9", "--no-save"], input="1\n" * 9)
        assert result.exit_code == 0, result.output
        assert "Score 9/27" in result.output

    def test_phq9_reasks_out_of_range(self, data_env):
        """Test that answers above 3 are asked again, and the result is saved."""
        result = runner.invoke(app, ["phq9"], input="7\n" + "0\n" * 9)
        assert result.exit_code == 0, result.output
        assert "0 to 3" in result.output
        with JournalStorage() as storage:
            from periodhub.models import AssessmentKind
            assert len(storage.assessment_history(AssessmentKind.PHQ9)) == 1


class TestDataCommands:
    """Tests for status, analytics, export and import."""

    def test_status(self, data_env):
        """Test the status overview."""
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "Schema version: 1.0.0" in result.output

    def test_analytics(self, data_env):
        """Test analytics output with and without data."""
        assert "No pain records" in runner.invoke(app, ["analytics"]).output
        for days, level in (("-3", "4"), ("-2", "6")):
            runner.invoke(app, ["log-pain", "--pain", level, "--date", days, "--time", "09:00"])
        result = runner.invoke(app, ["analytics"])
        assert result.exit_code == 0
        assert "Average pain: 5.0/10" in result.output

    def test_export_import(self, data_env, tmp_path):
        """Test exporting and importing with replace."""
        runner.invoke(app, ["log-symptom", "--pain", "2", "--date", "-1"])
        target = tmp_path / "export.json"
        assert runner.invoke(app, ["export", str(target)]).exit_code == 0
        assert len(json.loads(target.read_text(encoding="utf-8"))["symptom_entries"]) == 1

        result = runner.invoke(app, ["import-data", str(target), "--replace"])
        assert result.exit_code == 0
        assert "symptom_entries: 1 imported" in result.output

    def test_import_invalid(self, data_env, tmp_path):
        """Test importing a file that is not JSON."""
        source = tmp_path / "bad.json"
        source.write_text("not json", encoding="utf-8")
        result = runner.invoke(app, ["import-data", str(source)])
        assert result.exit_code == 1

    def test_sitemap(self, data_env):
        """Test the sitemap listing."""
        result = runner.invoke(app, ["sitemap"])
        assert result.exit_code == 0
        assert "Sitemap" in result.output
