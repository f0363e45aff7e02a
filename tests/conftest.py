"""Shared test fixtures and configuration."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from widget_tester import page_helpers
from widget_tester.models import RunSummary, TrialConfig


@pytest.fixture
def fast_config(tmp_path):
    """A TrialConfig with every wait shortened to zero."""
    return TrialConfig(
        url='https://example.com',
        num_tests=1,
        headless=True,
        browser_slow_mo_ms=0,
        widget_settle_ms=0,
        click_settle_ms=0,
        trial_delay_s=0,
        output_dir=str(tmp_path),
    )


@pytest.fixture
def sample_summary():
    """A finished RunSummary with a mix of outcomes."""
    start = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
    summary = RunSummary(
        total_tests=4,
        successful_clicks=1,
        failed_clicks=1,
        page_load_errors=1,
        widget_not_found=1,
        unrecognized_events=2,
        interaction_requests=5,
        start_time=start,
        end_time=start + timedelta(seconds=42.5),
        test_duration=42.5,
    )
    summary.analytics_events['click_widget'] = 3
    summary.analytics_events['widget_impression'] = 4
    return summary


def make_request(url, method='POST', post_data=None, headers=None):
    """Stand-in for a Playwright Request."""
    return SimpleNamespace(
        url=url,
        method=method,
        post_data=post_data,
        post_data_buffer=post_data.encode('utf-8') if post_data is not None else None,
        headers=headers or {'content-type': 'application/json'},
    )


class BinaryBodyRequest:
    """Request whose body is not UTF-8: ``post_data`` raises like Playwright's."""

    def __init__(self, url, body=b'\x1f\x8b\x08\x00\xff', method='POST'):
        self.url = url
        self.method = method
        self.headers = {'content-encoding': 'gzip'}
        self.post_data_buffer = body

    @property
    def post_data(self):
        return self.post_data_buffer.decode()


@pytest.fixture
def fake_page():
    """Factory for MagicMock pages that replay requests during goto().

    Args (of the returned factory):
        rect: value returned for the widget geometry script.
        iframes: value returned for the iframe listing script.
        requests: requests dispatched to 'request' handlers during goto().
        goto_error / selector_error: exceptions raised by those calls.
    """
    def _make(rect=None, iframes=None, requests=(), goto_error=None, selector_error=None):
        page = MagicMock()
        handlers = {}

        def on(event, handler):
            handlers.setdefault(event, []).append(handler)

        def goto(url, **kwargs):
            for request in requests:
                for handler in handlers.get('request', []):
                    handler(request)
            if goto_error is not None:
                raise goto_error

        def evaluate(script, *args):
            if script == page_helpers._WIDGET_RECT_JS:
                return rect
            if script == page_helpers._IFRAME_JS:
                return iframes if iframes is not None else []
            return None

        page.on.side_effect = on
        page.goto.side_effect = goto
        page.evaluate.side_effect = evaluate
        page.eval_on_selector.return_value = '<div class="banner">Play now</div>'
        if selector_error is not None:
            page.wait_for_selector.side_effect = selector_error
        page.handlers = handlers
        return page

    return _make


WIDGET_RECT = {'x': 150.0, 'y': 100.0, 'width': 300.0, 'height': 200.0, 'top': 0.0, 'left': 0.0}
