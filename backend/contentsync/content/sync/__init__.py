from .channel import DEFAULT_POLL_INTERVAL, PreviewBroadcaster, PreviewListener, poll_interval_from_config
from .events import CONTENT_SAVED, EventBus
from .location import PreviewLocation
from .messages import CONTENT_CHANGED, ContentChangedMessage, MessageWindow

__all__ = [
    "CONTENT_CHANGED",
    "CONTENT_SAVED",
    "DEFAULT_POLL_INTERVAL",
    "ContentChangedMessage",
    "EventBus",
    "MessageWindow",
    "PreviewBroadcaster",
    "PreviewListener",
    "PreviewLocation",
    "poll_interval_from_config",
]
