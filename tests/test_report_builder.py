"""Unit tests for report building and serialization."""
import json
from datetime import datetime, timezone

import pytest

from attestation_checker.app.models import AttestationRecord
from src.core.report import (
    ReportBuilder,
    is_supported_platform,
    normalize_repository_url,
    round_half_up,
    write_report,
)

GENERATED_AT = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def make_records(total: int, attested: int):
    return [
        AttestationRecord(
            package=f"pkg-{i}",
            version="1.0.0",
            last_uploaded="2025-01-01T00:00:00.000Z",
            attestations_url=f"https://registry.example.test/-/npm/v1/attestations/pkg-{i}@1.0.0" if i < attested else "",
            repository_url=f"git+https://github.com/o/pkg-{i}.git",
        )
        for i in range(total)
    ]


class TestSupportedPlatform:
    """Test repository host detection."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("git+https://github.com/foo/bar.git", True),
            ("https://gitlab.com/group/project", True),
            ("git+ssh://git@github.com/foo/bar.git", True),
            ("", False),
            (None, False),
            ("https://example.com/foo", False),
            ("https://bitbucket.org/foo/bar.git", False),
        ],
    )
    def test_is_supported_platform(self, url, expected):
        assert is_supported_platform(url) is expected

    def test_normalize_strips_prefix_and_suffix(self):
        assert normalize_repository_url("git+https://github.com/foo/bar.git") == "https://github.com/foo/bar"
        assert normalize_repository_url("https://github.com/foo/bar") == "https://github.com/foo/bar"


class TestSummary:
    """Test summary statistics."""

    def test_percentage_rounds_to_one_decimal(self):
        summary = ReportBuilder.summarize(make_records(7, 3))
        assert summary.total_packages == 7
        assert summary.packages_with_attestations == 3
        assert summary.attestation_percentage == 42.9

    def test_empty_report_has_zero_percentage(self):
        summary = ReportBuilder.summarize([])
        assert summary.total_packages == 0
        assert summary.packages_with_attestations == 0
        assert summary.attestation_percentage == 0.0

    def test_round_half_up(self):
        assert round_half_up(0.25) == 0.3
        assert round_half_up(66.66666) == 66.7
        assert round_half_up(100.0) == 100.0


class TestReportBuilder:
    """Test report assembly."""

    def test_ranks_follow_input_order(self):
        records = make_records(3, 1)
        report = ReportBuilder().build(list(reversed(records)), generated_at=GENERATED_AT)

        assert [entry.rank for entry in report.packages] == [1, 2, 3]
        assert [entry.package for entry in report.packages] == ["pkg-2", "pkg-1", "pkg-0"]

    def test_report_dict_shape(self):
        report = ReportBuilder().build(make_records(2, 1), generated_at=GENERATED_AT)
        data = report.to_dict()

        assert data["generated_at"] == "2025-01-02T03:04:05.000Z"
        assert data["summary"] == {
            "total_packages": 2,
            "packages_with_attestations": 1,
            "attestation_percentage": 50.0,
        }
        assert data["packages"][0] == {
            "rank": 1,
            "package": "pkg-0",
            "version": "1.0.0",
            "lastUploaded": "2025-01-01T00:00:00.000Z",
            "attestationsUrl": "https://registry.example.test/-/npm/v1/attestations/pkg-0@1.0.0",
            "trustedPublisherId": "",
            "repositoryUrl": "git+https://github.com/o/pkg-0.git",
            "isSupportedPlatform": True,
        }
        assert data["packages"][1]["attestationsUrl"] == ""

    def test_generated_at_defaults_to_now(self):
        report = ReportBuilder().build([])
        parsed = datetime.fromisoformat(report.generated_at.replace("Z", "+00:00"))
        assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 5

    def test_write_report_creates_json_file(self, tmp_path):
        report = ReportBuilder().build(make_records(1, 1), generated_at=GENERATED_AT)
        path = write_report(report, tmp_path / "nested" / "attestations.json")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == report.to_dict()
