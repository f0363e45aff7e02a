"""Folds trial results into a run summary.

The run loop owns the single ``ResultAggregator`` for a run and is the only
caller of ``append``; trials hand back a ``TrialResult`` and keep no
reference to the summary.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .models import RunSummary, TrialOutcome, TrialResult
from .patterns import is_recognized_event

log = logging.getLogger(__name__)


class ResultAggregator:
    """Accumulates counters across trials."""

    def __init__(self, summary: Optional[RunSummary] = None):
        self.summary = summary or RunSummary()
        self.finished = False

    def start(self) -> None:
        """Stamp the run start time."""
        self.summary.start_time = datetime.now(timezone.utc)

    def append(self, result: TrialResult) -> None:
        """Count one trial and the events it observed."""
        if self.finished:
            raise RuntimeError('cannot append to a finished run')

        s = self.summary
        s.total_tests += 1

        if result.outcome is TrialOutcome.CLICK_EFFECTIVE:
            s.successful_clicks += 1
        elif result.outcome is TrialOutcome.CLICK_INEFFECTIVE:
            s.failed_clicks += 1
        elif result.outcome is TrialOutcome.WIDGET_NOT_FOUND:
            s.widget_not_found += 1
        elif result.outcome is TrialOutcome.PAGE_LOAD_FAILED:
            s.page_load_errors += 1

        for event in result.events:
            if is_recognized_event(event.event_name):
                s.analytics_events[event.event_name] += 1
            else:
                s.unrecognized_events += 1
                log.debug('Test %d: unrecognised analytics event %r', result.trial_num, event.event_name)

        s.interaction_requests += len(result.click_requests)

    def finish(self) -> RunSummary:
        """Stamp the end time, compute the duration and freeze the summary."""
        if not self.finished:
            s = self.summary
            s.end_time = datetime.now(timezone.utc)
            s.test_duration = (s.end_time - s.start_time).total_seconds()
            self.finished = True
        return self.summary
