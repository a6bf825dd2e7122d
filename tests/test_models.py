"""
Unit tests for API records.
"""

import datetime
import json

import pydantic
import pytest

from compare_api_client import Comparison, Export, ExportKind


class TestComparison:
    """Test comparison record parsing and invariants."""

    def test_parse(self, comparison_payload):
        comparison = Comparison.model_validate(comparison_payload)

        assert comparison.identifier == "abcDEF123"
        assert comparison.is_public is False
        assert comparison.left.file_type == "pdf"
        assert comparison.left.source_url == "https://example.com/left.pdf"
        assert comparison.right.display_name == "right.docx"
        assert comparison.creation_time == datetime.datetime(2026, 10, 18, 10, 0, tzinfo=datetime.timezone.utc)
        assert comparison.ready is True
        assert comparison.failed is False
        assert comparison.error_message is None

    def test_json_round_trip(self, comparison_payload):
        """Test that serializing and parsing back gives an equal record."""
        comparison = Comparison.model_validate(comparison_payload)

        text = comparison.to_json()
        assert Comparison.model_validate_json(text) == comparison

    def test_to_json_uses_wire_names_and_omits_nulls(self, comparison_payload):
        data = json.loads(Comparison.model_validate(comparison_payload).to_json())

        assert data["public"] is False
        assert "is_public" not in data
        assert "error_message" not in data
        assert "source_url" not in data["right"]

    def test_not_ready(self, comparison_payload):
        comparison_payload.update(ready=False, ready_time=None, failed=None)

        comparison = Comparison.model_validate(comparison_payload)
        assert comparison.ready is False
        assert comparison.failed is None

    def test_failed_with_message(self, comparison_payload):
        comparison_payload.update(failed=True, error_message="Could not convert file.")

        comparison = Comparison.model_validate(comparison_payload)
        assert comparison.failed is True
        assert comparison.error_message == "Could not convert file."

    @pytest.mark.parametrize("changes", [
        {"failed": None},                                        # ready but no failed flag
        {"ready_time": None},                                    # not ready but failed flag set
        {"failed": True},                                        # failed without a message
        {"error_message": "unexpected"},                         # message without failure
        {"ready_time": None, "failed": None, "error_message": "x"},
    ])
    def test_inconsistent_status_rejected(self, comparison_payload, changes):
        comparison_payload.update(changes)

        with pytest.raises(pydantic.ValidationError):
            Comparison.model_validate(comparison_payload)

    def test_missing_required_field(self, comparison_payload):
        del comparison_payload["left"]

        with pytest.raises(pydantic.ValidationError):
            Comparison.model_validate(comparison_payload)

    def test_str_is_json(self, comparison_payload):
        comparison = Comparison.model_validate(comparison_payload)
        assert json.loads(str(comparison))["identifier"] == "abcDEF123"


class TestExport:
    """Test export record parsing."""

    def test_parse(self, export_payload):
        export = Export.model_validate(export_payload)

        assert export.identifier == "exp12345"
        assert export.comparison == "abcDEF123"
        assert export.kind == ExportKind.COMBINED.value
        assert export.ready is True
        assert export.include_cover_page is True

    def test_pending_export_has_no_url(self, export_payload):
        export_payload.update(url=None, ready=False, failed=None)

        export = Export.model_validate(export_payload)
        assert export.url is None
        assert export.ready is False


class TestExportKind:
    def test_wire_values(self):
        assert [k.value for k in ExportKind] == ["single_page", "combined", "left", "right"]

    def test_lookup_by_value(self):
        assert ExportKind("single_page") is ExportKind.SINGLE_PAGE
