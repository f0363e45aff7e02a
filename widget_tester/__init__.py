"""Playgama widget synthetic tester – core package.

Re-exports all public symbols so consumers can do:
    from widget_tester import run_tests, TrialConfig
"""

# Patterns
from .patterns import (  # noqa: F401
    DEFAULT_TARGET_URL,
    WIDGET_SELECTOR,
    ANALYTICS_URL_KEYWORDS,
    PRODUCT_IDENTIFIER,
    RECOGNIZED_EVENTS,
    is_recognized_event,
)

# Models
from .models import (  # noqa: F401
    TrialOutcome,
    AnalyticsEvent,
    ClickRequest,
    RequestClassification,
    WidgetInfo,
    TrialResult,
    RunSummary,
    TrialConfig,
    RunResult,
)

# Classification
from .classifier import (  # noqa: F401
    is_analytics_request,
    is_interaction_request,
    parse_analytics_event,
    classify_request,
)

# Page helpers
from .page_helpers import (  # noqa: F401
    get_widget_info,
    widget_preview,
    list_iframes,
    has_iframes,
)

# Aggregation
from .aggregator import ResultAggregator  # noqa: F401

# Reporting
from .reporting import (  # noqa: F401
    success_rate,
    generate_report,
    generate_json_report,
    results_filename,
    save_results,
)

# Trials
from .trial import run_single_trial  # noqa: F401
from .runner import run_tests  # noqa: F401
