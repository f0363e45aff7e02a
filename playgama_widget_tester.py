#!/usr/bin/env python3
"""
Playgama Widget Synthetic Tester
Loads a page, clicks the embedded widget and tallies the results over
repeated runs.
Requires: pip install playwright && playwright install chromium
"""

import logging
import sys

from widget_tester import TrialConfig, DEFAULT_TARGET_URL, run_tests, save_results

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)s] %(message)s',
)
log = logging.getLogger(__name__)


USAGE = 'usage: playgama_widget_tester.py [URL] [NUM_TESTS] [--headless]'


def parse_args(argv: list) -> TrialConfig:
    """Build a TrialConfig from positional URL / count and an optional flag."""
    headless = '--headless' in argv
    positional = [a for a in argv if not a.startswith('--')]

    url = positional[0] if positional else DEFAULT_TARGET_URL
    if not url.startswith('http'):
        url = 'https://' + url

    num_tests = 10
    if len(positional) > 1:
        num_tests = int(positional[1])
        if num_tests < 0:
            raise ValueError('NUM_TESTS must not be negative')

    return TrialConfig(url=url, num_tests=num_tests, headless=headless)


def main(argv=None) -> int:
    """CLI entry point. Returns the process exit status."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = parse_args(argv)
    except ValueError as exc:
        print(f'{USAGE}\n{exc}', file=sys.stderr)
        return 2

    print('\nPlaygama Widget Synthetic Tester')
    print(f'Target: {config.url}')
    print('-' * 40)

    try:
        result = run_tests(config)
    except Exception as exc:
        log.error('Run aborted: %s', exc)
        return 1

    print(result.report_text)
    save_results(result.summary, result.url, config.output_dir, report_json=result.report_json)
    return 0


if __name__ == '__main__':
    sys.exit(main())
