"""Tests for report generation and the results file."""

import json
import re
from datetime import datetime, timezone

import pytest
from widget_tester import (
    generate_report,
    generate_json_report,
    results_filename,
    save_results,
    success_rate,
    RunSummary,
    RECOGNIZED_EVENTS,
)


class TestSuccessRate:
    """Tests for success_rate."""

    def test_zero_trials(self):
        assert success_rate(RunSummary()) == 0

    def test_rounded_to_two_decimals(self):
        assert success_rate(RunSummary(total_tests=3, successful_clicks=1)) == 33.33

    def test_all_successful(self):
        assert success_rate(RunSummary(total_tests=10, successful_clicks=10)) == 100.0


class TestGenerateReport:
    """Tests for the text report."""

    def test_report_contains_header_and_url(self, sample_summary):
        report = generate_report(sample_summary, 'https://example.com')

        assert 'SYNTHETIC TEST RESULTS' in report
        assert 'URL: https://example.com' in report

    def test_report_lists_counters(self, sample_summary):
        report = generate_report(sample_summary, 'https://example.com')

        assert 'Total tests: 4' in report
        assert 'Planned clicks: 4' in report
        assert 'Successful clicks: 1' in report
        assert 'Failed clicks: 1' in report
        assert 'Page load errors: 1' in report
        assert 'Widget not found: 1' in report
        assert 'Duration: 42.50 seconds' in report

    def test_report_lists_every_event_in_order(self, sample_summary):
        report = generate_report(sample_summary, 'https://example.com')

        positions = [report.index(f'{name}: ') for name in RECOGNIZED_EVENTS]
        assert positions == sorted(positions)
        assert 'click_widget: 3' in report
        assert 'close_modal: 0' in report
        assert 'unrecognized: 2' in report

    def test_report_success_rate(self, sample_summary):
        report = generate_report(sample_summary, 'https://example.com')

        assert 'Success rate: 25.00%' in report

    def test_report_with_no_trials(self):
        report = generate_report(RunSummary(), 'https://example.com')

        assert 'Total tests: 0' in report
        assert 'Success rate: 0.00%' in report

    def test_report_is_deterministic(self, sample_summary):
        assert generate_report(sample_summary, 'u') == generate_report(sample_summary, 'u')


class TestGenerateJsonReport:
    """Tests for the JSON record."""

    def test_keys_and_values(self, sample_summary):
        data = generate_json_report(sample_summary, 'https://example.com')

        assert data['url'] == 'https://example.com'
        assert data['totalTests'] == 4
        assert data['successfulClicks'] == 1
        assert data['failedClicks'] == 1
        assert data['pageLoadErrors'] == 1
        assert data['widgetNotFound'] == 1
        assert data['testDuration'] == 42.5
        assert data['successRate'] == 25.0
        assert data['plannedClicks'] == 4
        assert data['unrecognizedEvents'] == 2
        assert data['interactionRequests'] == 5
        assert data['analyticsEvents']['click_widget'] == 3

    def test_timestamps_are_iso_8601(self, sample_summary):
        data = generate_json_report(sample_summary, 'https://example.com')

        assert datetime.fromisoformat(data['startTime']) == sample_summary.start_time
        assert datetime.fromisoformat(data['endTime']) == sample_summary.end_time

    def test_serializable(self, sample_summary):
        data = generate_json_report(sample_summary, 'https://example.com')

        assert json.loads(json.dumps(data)) == data


class TestResultsFile:
    """Tests for naming and writing the results file."""

    def test_filename_is_filesystem_safe(self):
        name = results_filename(datetime(2025, 3, 1, 12, 30, 45, 123000, tzinfo=timezone.utc))

        assert name == 'test_results_2025-03-01T12-30-45-123Z.json'
        assert not re.search(r'[:<>"/\\|?*]', name)

    def test_save_writes_parseable_json(self, sample_summary, tmp_path):
        path = save_results(sample_summary, 'https://example.com', tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith('test_results_')
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['totalTests'] == 4
        assert data['successRate'] == 25.0

    def test_zero_trials_still_written(self, tmp_path):
        path = save_results(RunSummary(), 'https://example.com', tmp_path)

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['totalTests'] == 0
        assert data['successRate'] == 0
        assert data['plannedClicks'] == 0
        assert all(v == 0 for v in data['analyticsEvents'].values())

    def test_existing_file_not_overwritten(self, sample_summary, tmp_path, monkeypatch):
        monkeypatch.setattr('widget_tester.reporting.results_filename', lambda: 'test_results_fixed.json')

        first = save_results(sample_summary, 'https://example.com', tmp_path)
        second = save_results(RunSummary(), 'https://example.com', tmp_path)
        third = save_results(RunSummary(), 'https://example.com', tmp_path)

        assert len({first, second, third}) == 3
        assert json.loads(first.read_text())['totalTests'] == 4

    def test_creates_output_dir(self, tmp_path):
        target = tmp_path / 'nested' / 'reports'

        path = save_results(RunSummary(), 'https://example.com', target)

        assert path.exists()
