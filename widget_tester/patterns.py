"""Fixed identifiers and keyword tables for the widget check.

Selector, analytics URL keywords, the product identifier used to spot
interaction requests, and the recognised analytics event names all live
here so the classifier and the trial runner share one source of truth.
"""


# ---------------------------------------------------------------------------
# Target
# ---------------------------------------------------------------------------

DEFAULT_TARGET_URL = 'https://widget-ctr.vercel.app'

WIDGET_SELECTOR = '#widget-playgama'


# ---------------------------------------------------------------------------
# Request matching
# ---------------------------------------------------------------------------

# A POST whose URL contains any of these is treated as an analytics submission.
ANALYTICS_URL_KEYWORDS = (
    'analytics',
    'playgama',
    'google-analytics',
    'gtag',
    'collect',
)

# Matched case-insensitively against the request URL.
PRODUCT_IDENTIFIER = 'playgama'

WRITE_METHOD = 'POST'


# ---------------------------------------------------------------------------
# Analytics events
# ---------------------------------------------------------------------------

# Order is the order used in the printed report.
RECOGNIZED_EVENTS = (
    'success_load_content',
    'error_load_content',
    'widget_impression',
    'click_widget',
    'close_modal',
    'game_impression',
    'click_game',
)

_RECOGNIZED_EVENT_SET = frozenset(RECOGNIZED_EVENTS)


def is_recognized_event(event_name: str) -> bool:
    """Return True if the event name has a typed counter."""
    return event_name in _RECOGNIZED_EVENT_SET


# ---------------------------------------------------------------------------
# Timing (milliseconds unless noted)
# ---------------------------------------------------------------------------

PAGE_TIMEOUT_MS = 15000
WIDGET_TIMEOUT_MS = 10000
WIDGET_SETTLE_MS = 1000
CLICK_SETTLE_MS = 2000
TRIAL_DELAY_S = 3.0

# Length of body / markup excerpts written to the log.
LOG_PREVIEW_CHARS = 100
