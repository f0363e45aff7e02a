"""Run orchestrator: launches the browser, loops over trials, builds reports."""

import logging
import time

from playwright.sync_api import sync_playwright

from .aggregator import ResultAggregator
from .models import TrialConfig, RunResult
from .reporting import generate_report, generate_json_report
from .trial import run_single_trial

log = logging.getLogger(__name__)


def run_tests(config: TrialConfig, progress_callback=None) -> RunResult:
    """Run ``config.num_tests`` trials one after another and return the results.

    Args:
        config: Run configuration.
        progress_callback: Optional callable(str). Called with short progress
            messages so a caller can display live status.

    Errors inside a trial are counted, never raised. Errors launching or
    closing the browser propagate to the caller.
    """
    _progress = progress_callback or (lambda msg: None)

    aggregator = ResultAggregator()
    aggregator.start()
    trials = []

    log.info('Starting run: %d tests, %d planned clicks', config.num_tests, config.num_tests)

    with sync_playwright() as p:
        _progress('LAUNCHING BROWSER...')
        browser = p.chromium.launch(headless=config.headless, slow_mo=config.browser_slow_mo_ms)
        try:
            for trial_num in range(1, config.num_tests + 1):
                _progress(f'TEST {trial_num}/{config.num_tests}')
                result = run_single_trial(browser, trial_num, config)
                aggregator.append(result)
                trials.append(result)
                time.sleep(config.trial_delay_s)
        finally:
            browser.close()

    summary = aggregator.finish()
    _progress('GENERATING REPORT...')
    report_text = generate_report(summary, config.url)
    report_json = generate_json_report(summary, config.url)
    _progress('RUN COMPLETE')

    return RunResult(
        url=config.url,
        summary=summary,
        trials=trials,
        report_text=report_text,
        report_json=report_json,
    )
