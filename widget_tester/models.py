"""Data classes used throughout the widget tester.

Trial outcomes, parsed analytics events, run configuration and the run
summary live here so every other module can import them cleanly.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from .patterns import (
    DEFAULT_TARGET_URL,
    WIDGET_SELECTOR,
    RECOGNIZED_EVENTS,
    PAGE_TIMEOUT_MS,
    WIDGET_TIMEOUT_MS,
    WIDGET_SETTLE_MS,
    CLICK_SETTLE_MS,
    TRIAL_DELAY_S,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrialOutcome(Enum):
    """Result of a single trial."""
    CLICK_EFFECTIVE = 'click_effective'
    CLICK_INEFFECTIVE = 'click_ineffective'
    WIDGET_NOT_FOUND = 'widget_not_found'
    PAGE_LOAD_FAILED = 'page_load_failed'


@dataclass(frozen=True)
class AnalyticsEvent:
    """An analytics submission decoded from a request body."""
    event_name: str
    sent_at: Optional[str] = None
    clid: Optional[str] = None
    widget_id: Optional[str] = None
    widget_domain: Optional[str] = None
    widget_path: Optional[str] = None
    game_id: Optional[str] = None
    widget_have_powered_by_link: Optional[bool] = None
    event_payload: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, data: dict) -> 'AnalyticsEvent':
        """Build an event from a decoded JSON object carrying ``eventName``."""
        return cls(
            event_name=str(data['eventName']),
            sent_at=data.get('sentAt'),
            clid=data.get('clid'),
            widget_id=data.get('widgetId'),
            widget_domain=data.get('widget_domain'),
            widget_path=data.get('widget_path'),
            game_id=data.get('game_id'),
            widget_have_powered_by_link=data.get('widget_have_powered_by_link'),
            event_payload=data.get('eventPayload'),
            raw=dict(data),
        )


@dataclass(frozen=True)
class ClickRequest:
    """A POST to the widget vendor captured during a trial."""
    url: str
    method: str
    headers: dict = field(default_factory=dict, compare=False)
    post_data: Optional[str] = None


@dataclass(frozen=True)
class RequestClassification:
    """What the classifier made of one outgoing request."""
    is_analytics: bool = False
    is_interaction: bool = False
    event: Optional[AnalyticsEvent] = None


@dataclass(frozen=True)
class WidgetInfo:
    """Widget geometry in viewport coordinates. ``x``/``y`` are the centre."""
    x: float
    y: float
    width: float
    height: float
    top: float
    left: float


@dataclass
class TrialResult:
    """Everything one trial observed."""
    trial_num: int
    outcome: TrialOutcome
    events: list[AnalyticsEvent] = field(default_factory=list)
    click_requests: list[ClickRequest] = field(default_factory=list)
    error: str = ''


def _empty_event_counts() -> dict:
    return {name: 0 for name in RECOGNIZED_EVENTS}


@dataclass
class RunSummary:
    """Aggregate counters for a whole run."""
    total_tests: int = 0
    successful_clicks: int = 0
    failed_clicks: int = 0
    page_load_errors: int = 0
    widget_not_found: int = 0
    analytics_events: dict = field(default_factory=_empty_event_counts)
    unrecognized_events: int = 0
    interaction_requests: int = 0
    start_time: datetime = field(default_factory=_utcnow)
    end_time: datetime = field(default_factory=_utcnow)
    test_duration: float = 0.0


@dataclass
class TrialConfig:
    """Config for a run of trials."""
    url: str = DEFAULT_TARGET_URL
    num_tests: int = 100
    widget_selector: str = WIDGET_SELECTOR
    headless: bool = False
    browser_slow_mo_ms: int = 1000
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None
    page_timeout_ms: int = PAGE_TIMEOUT_MS
    widget_timeout_ms: int = WIDGET_TIMEOUT_MS
    widget_settle_ms: int = WIDGET_SETTLE_MS
    click_settle_ms: int = CLICK_SETTLE_MS
    trial_delay_s: float = TRIAL_DELAY_S
    output_dir: str = '.'


@dataclass
class RunResult:
    """Results for a completed run."""
    url: str
    summary: RunSummary
    trials: list[TrialResult]
    report_text: str
    report_json: dict[str, Any]
