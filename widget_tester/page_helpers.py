"""Page inspection helpers: widget geometry, markup preview, iframe check."""

import logging
from typing import Optional

from playwright.sync_api import Page

from .models import WidgetInfo
from .patterns import LOG_PREVIEW_CHARS

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JS snippets
# ---------------------------------------------------------------------------

_WIDGET_RECT_JS = '''
(selector) => {
    const widget = document.querySelector(selector);
    if (!widget) return null;
    const rect = widget.getBoundingClientRect();
    return {
        x: rect.x + rect.width / 2,
        y: rect.y + rect.height / 2,
        width: rect.width,
        height: rect.height,
        top: rect.top,
        left: rect.left
    };
}
'''

_IFRAME_JS = '''
() => Array.from(document.querySelectorAll('iframe')).map(el => ({
    id: el.id || '',
    className: el.className || '',
    src: el.src || '',
    visible: getComputedStyle(el).display !== 'none'
}))
'''


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def get_widget_info(page: Page, selector: str) -> Optional[WidgetInfo]:
    """Return the widget's bounding box, or None if it is not in the DOM."""
    rect = page.evaluate(_WIDGET_RECT_JS, selector)
    if not rect:
        return None
    return WidgetInfo(
        x=rect['x'],
        y=rect['y'],
        width=rect['width'],
        height=rect['height'],
        top=rect['top'],
        left=rect['left'],
    )


def widget_preview(page: Page, selector: str) -> str:
    """First characters of the widget's inner HTML, for the log."""
    try:
        html = page.eval_on_selector(selector, 'el => el.innerHTML')
    except Exception as exc:
        log.debug('Widget preview failed for %s: %s', selector, exc)
        return ''
    return (html or '')[:LOG_PREVIEW_CHARS]


def list_iframes(page: Page) -> list[dict]:
    """Describe every iframe currently in the document."""
    return page.evaluate(_IFRAME_JS) or []


def has_iframes(page: Page) -> bool:
    """True if the page contains at least one iframe, visible or not."""
    iframes = list_iframes(page)
    for frame in iframes:
        log.debug('iframe id=%r class=%r src=%s visible=%s',
                  frame.get('id'), frame.get('className'), frame.get('src'), frame.get('visible'))
    return len(iframes) > 0
