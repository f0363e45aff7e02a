"""A single trial: load the page, find the widget, click it, look for an iframe."""

import logging
from typing import Optional

from playwright.sync_api import Browser, Error as PlaywrightError

from .classifier import classify_request
from .models import ClickRequest, TrialConfig, TrialOutcome, TrialResult
from .page_helpers import get_widget_info, widget_preview, has_iframes
from .patterns import WRITE_METHOD

log = logging.getLogger(__name__)


def _new_page(browser: Browser, config: TrialConfig):
    if config.viewport_width and config.viewport_height:
        return browser.new_page(viewport={'width': config.viewport_width, 'height': config.viewport_height})
    return browser.new_page()


def _request_body(request, trial_num: int) -> Optional[str]:
    """Body of a POST as text; undecodable bytes are replaced, never raised."""
    if request.method != WRITE_METHOD:
        return None
    try:
        buffer = request.post_data_buffer
    except Exception as exc:
        log.warning('Test %d: could not read request body for %s - %s', trial_num, request.url, exc)
        return None
    if buffer is None:
        return None
    return buffer.decode('utf-8', errors='replace')


def _log_events(trial_num: int, events: list) -> None:
    log.info('Test %d: analytics events: %d', trial_num, len(events))
    for event in events:
        log.info('  - %s: %s', event.event_name, event.raw)


def run_single_trial(browser: Browser, trial_num: int, config: TrialConfig) -> TrialResult:
    """Run one trial on a fresh page and report what happened.

    Never raises for problems inside the trial: navigation failures and any
    other unexpected error are reported as ``PAGE_LOAD_FAILED``, a widget that
    does not appear as ``WIDGET_NOT_FOUND``. The page is always closed.

    A click counts as effective when at least one iframe is present after the
    settle window. Unrelated iframes (ads, trackers) will also satisfy this.
    """
    page = _new_page(browser, config)
    events = []
    click_requests = []

    def on_request(request) -> None:
        url = request.url
        method = request.method
        post_data = _request_body(request, trial_num)
        result = classify_request(url, method, post_data, trial_num)

        if result.is_analytics:
            log.info('Test %d: analytics request: %s %s', trial_num, method, url)
            if result.event is not None:
                events.append(result.event)
                log.info('Test %d: analytics event: %s', trial_num, result.event.event_name)

        if result.is_interaction:
            click_requests.append(ClickRequest(
                url=url,
                method=method,
                headers=dict(request.headers),
                post_data=post_data,
            ))

    def on_frame_attached(frame) -> None:
        log.info('Test %d: iframe attached: %s', trial_num, frame.url)

    def finish(outcome: TrialOutcome, error: str = '') -> TrialResult:
        return TrialResult(
            trial_num=trial_num,
            outcome=outcome,
            events=list(events),
            click_requests=list(click_requests),
            error=error,
        )

    try:
        page.on('request', on_request)
        page.on('frameattached', on_frame_attached)

        log.info('Test %d: loading %s', trial_num, config.url)
        page.goto(config.url, wait_until='networkidle', timeout=config.page_timeout_ms)

        try:
            page.wait_for_selector(config.widget_selector, timeout=config.widget_timeout_ms)
        except PlaywrightError as exc:
            log.warning('Test %d: widget not found - %s', trial_num, exc)
            return finish(TrialOutcome.WIDGET_NOT_FOUND, str(exc))

        log.info('Test %d: widget found', trial_num)
        page.wait_for_timeout(config.widget_settle_ms)
        log.info('Test %d: widget content: %s...', trial_num, widget_preview(page, config.widget_selector))

        widget = get_widget_info(page, config.widget_selector)
        if widget is None:
            log.warning('Test %d: widget has no geometry', trial_num)
            return finish(TrialOutcome.WIDGET_NOT_FOUND, 'widget geometry unavailable')

        log.info(
            'Test %d: widget size %sx%s, centre (%s, %s)',
            trial_num, widget.width, widget.height, widget.x, widget.y,
        )
        page.mouse.click(widget.x, widget.y)
        log.info('Test %d: clicked widget centre', trial_num)

        page.wait_for_timeout(config.click_settle_ms)
        iframe_seen = has_iframes(page)
        if iframe_seen:
            log.info('Test %d: iframe present after click', trial_num)

        page.wait_for_timeout(config.click_settle_ms)

        outcome = TrialOutcome.CLICK_EFFECTIVE if iframe_seen else TrialOutcome.CLICK_INEFFECTIVE
        log.info('Test %d: successful clicks: %d', trial_num, 1 if iframe_seen else 0)
        _log_events(trial_num, events)
        return finish(outcome)

    except Exception as exc:
        log.warning('Test %d: page load error - %s', trial_num, exc)
        return finish(TrialOutcome.PAGE_LOAD_FAILED, str(exc))

    finally:
        try:
            page.close()
        except Exception as exc:
            log.warning('Test %d: failed to close page - %s', trial_num, exc)
