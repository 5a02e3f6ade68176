"""Keep the highlighter from observing its own document edits."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from regex_highlight.host import HostControl, TextChangedHandler


@contextmanager
def suspended_notifications(
    host: HostControl, handler: TextChangedHandler
) -> Iterator[HostControl]:
    """Unsubscribe ``handler`` for the duration of the block.

    The handler is subscribed again on every exit path, including early
    returns and exceptions.
    """

    host.unsubscribe_text_changed(handler)
    try:
        yield host
    finally:
        host.subscribe_text_changed(handler)


__all__ = ["suspended_notifications"]
