"""Report generation: human-readable text, JSON record and the results file.

The text block is printed at the end of a CLI run. The JSON record is what
gets written to disk and what the run service hands back to clients.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .models import RunSummary
from .patterns import RECOGNIZED_EVENTS

log = logging.getLogger(__name__)


def success_rate(summary: RunSummary) -> float:
    """Percentage of trials with an effective click, two decimals. 0 for no trials."""
    if summary.total_tests <= 0:
        return 0.0
    return round(summary.successful_clicks / summary.total_tests * 100, 2)


# ---------------------------------------------------------------------------
# Text report
# ---------------------------------------------------------------------------

def _section_header(url: str) -> list[str]:
    return [
        '',
        '=' * 50,
        'SYNTHETIC TEST RESULTS',
        '=' * 50,
        f'URL: {url}',
    ]


def _section_counters(summary: RunSummary) -> list[str]:
    return [
        f'Total tests: {summary.total_tests}',
        f'Planned clicks: {summary.total_tests}',
        f'Successful clicks: {summary.successful_clicks}',
        f'Failed clicks: {summary.failed_clicks}',
        f'Page load errors: {summary.page_load_errors}',
        f'Widget not found: {summary.widget_not_found}',
        f'Duration: {summary.test_duration:.2f} seconds',
    ]


def _section_events(summary: RunSummary) -> list[str]:
    lines = ['', 'ANALYTICS EVENTS:']
    for name in RECOGNIZED_EVENTS:
        lines.append(f'{name}: {summary.analytics_events.get(name, 0)}')
    lines.append(f'unrecognized: {summary.unrecognized_events}')
    lines.append(f'Interaction requests: {summary.interaction_requests}')
    return lines


def generate_report(summary: RunSummary, url: str) -> str:
    """Render the summary as a fixed-layout text block."""
    lines = _section_header(url)
    lines += _section_counters(summary)
    lines += _section_events(summary)
    lines += [
        '',
        f'Success rate: {success_rate(summary):.2f}%',
        '=' * 50,
    ]
    return '\n'.join(lines)


# ---------------------------------------------------------------------------
# JSON report
# ---------------------------------------------------------------------------

def generate_json_report(summary: RunSummary, url: str) -> dict:
    """Structured equivalent of the text report."""
    return {
        'url': url,
        'totalTests': summary.total_tests,
        'successfulClicks': summary.successful_clicks,
        'failedClicks': summary.failed_clicks,
        'pageLoadErrors': summary.page_load_errors,
        'widgetNotFound': summary.widget_not_found,
        'testDuration': summary.test_duration,
        'startTime': summary.start_time.isoformat(),
        'endTime': summary.end_time.isoformat(),
        'analyticsEvents': {name: summary.analytics_events.get(name, 0) for name in RECOGNIZED_EVENTS},
        'unrecognizedEvents': summary.unrecognized_events,
        'interactionRequests': summary.interaction_requests,
        'successRate': success_rate(summary),
        'plannedClicks': summary.total_tests,
    }


# ---------------------------------------------------------------------------
# Results file
# ---------------------------------------------------------------------------

def results_filename(now: Optional[datetime] = None) -> str:
    """``test_results_<timestamp>.json`` with ':' and '.' made filename-safe."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    stamp = stamp.replace(':', '-').replace('.', '-')
    return f'test_results_{stamp}.json'


def save_results(summary: RunSummary, url: str, output_dir='.', report_json: Optional[dict] = None) -> Path:
    """Write the JSON report and return its path.

    An existing file with the same name is never overwritten; a numeric
    suffix is added instead.
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / results_filename()
    counter = 1
    while path.exists():
        path = path.with_name(f'{path.stem.rsplit("__", 1)[0]}__{counter}.json')
        counter += 1

    data = report_json if report_json is not None else generate_json_report(summary, url)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    log.info('Results saved to %s', path)
    return path
