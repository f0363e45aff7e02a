"""Classification of outgoing requests observed during a trial.

Everything here is a plain function of (url, method, body) so it can be
exercised without a browser. The request handler registered on the page is
only responsible for routing the result into the trial's buffers.
"""

import json
import logging
from typing import Optional

from .models import AnalyticsEvent, RequestClassification
from .patterns import (
    ANALYTICS_URL_KEYWORDS,
    PRODUCT_IDENTIFIER,
    WRITE_METHOD,
    LOG_PREVIEW_CHARS,
)

log = logging.getLogger(__name__)


def is_analytics_request(url: str, method: str) -> bool:
    """POST to a URL containing one of the analytics keywords."""
    return method == WRITE_METHOD and any(keyword in url for keyword in ANALYTICS_URL_KEYWORDS)


def is_interaction_request(url: str, method: str) -> bool:
    """POST to the widget vendor. Diagnostic only, not a success signal."""
    return method == WRITE_METHOD and PRODUCT_IDENTIFIER in url.lower()


def parse_analytics_event(post_data: Optional[str], trial_num: int = 0) -> Optional[AnalyticsEvent]:
    """Decode an analytics body into an event.

    Returns None for an empty body, a body that is not valid JSON, or a JSON
    value that does not carry an ``eventName``. Invalid JSON is logged and
    otherwise ignored.
    """
    if not post_data:
        return None

    try:
        data = json.loads(post_data)
    except (json.JSONDecodeError, TypeError) as exc:
        log.warning(
            'Test %d: could not parse analytics body (%s): %s...',
            trial_num, exc, post_data[:LOG_PREVIEW_CHARS],
        )
        return None

    if isinstance(data, dict) and data.get('eventName'):
        return AnalyticsEvent.from_payload(data)
    return None


def classify_request(
    url: str,
    method: str,
    post_data: Optional[str] = None,
    trial_num: int = 0,
) -> RequestClassification:
    """Classify one request. The body is only parsed for analytics requests."""
    analytics = is_analytics_request(url, method)
    event = parse_analytics_event(post_data, trial_num) if analytics else None
    return RequestClassification(
        is_analytics=analytics,
        is_interaction=is_interaction_request(url, method),
        event=event,
    )
