"""
Tests for HeaderSpec, Sheet and ReportData Value Objects.
"""

from dataclasses import FrozenInstanceError

import pytest

from report_service.domain.report.value_objects.sheet import HeaderSpec, ReportData, Sheet


# ============================================================================
# HeaderSpec
# ============================================================================


def test_from_names_assigns_display_order():
    headers = HeaderSpec.from_names(["region", "amount"])

    assert headers == (HeaderSpec("region", 0), HeaderSpec("amount", 1))


def test_header_order_must_be_non_negative():
    with pytest.raises(ValueError, match=">= 0"):
        HeaderSpec(name="region", order=-1)


# ============================================================================
# Sheet
# ============================================================================


def test_sheet_header_names_follow_display_order():
    """Test header_names sorts by order, not by tuple position."""
    sheet = Sheet(
        title="s",
        headers=(HeaderSpec("amount", 1), HeaderSpec("region", 0)),
        rows=(),
    )

    assert sheet.header_names == ["region", "amount"]


def test_sheet_rejects_row_of_wrong_width():
    with pytest.raises(ValueError, match="row 1 has 1 values, expected 2"):
        Sheet(
            title="s",
            headers=HeaderSpec.from_names(["region", "amount"]),
            rows=(("east", 1), ("west",)),
        )


def test_sheet_is_immutable():
    sheet = Sheet(title="s", headers=HeaderSpec.from_names(["a"]))

    with pytest.raises(FrozenInstanceError):
        sheet.title = "other"


def test_sheet_row_count():
    sheet = Sheet(
        title="s", headers=HeaderSpec.from_names(["a"]), rows=((1,), (2,), (3,))
    )

    assert sheet.row_count == 3


# ============================================================================
# ReportData
# ============================================================================


def test_report_data_sheet_titles():
    headers = HeaderSpec.from_names(["a"])
    report = ReportData(
        file_id="abc",
        title="t",
        submitter="alice",
        sheets=(Sheet("east", headers), Sheet("west", headers)),
    )

    assert report.sheet_titles == ["east", "west"]


def test_report_data_defaults_to_no_sheets():
    assert ReportData(file_id="abc", title="", submitter="").sheets == ()
