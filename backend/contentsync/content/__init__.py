from .merger import merge
from .schema import SCHEMAS, defaults_for, is_registered
from .session import ContentSession, SaveStatus, SessionMode, SessionState, session_for_url
from .store import (
    AuthoringRecord,
    DraftWriteResult,
    InMemoryVersionStore,
    PublicRecord,
    PublishResult,
    VersionStore,
)

__all__ = [
    "AuthoringRecord",
    "ContentSession",
    "DraftWriteResult",
    "InMemoryVersionStore",
    "PublicRecord",
    "PublishResult",
    "SCHEMAS",
    "SaveStatus",
    "SessionMode",
    "SessionState",
    "VersionStore",
    "defaults_for",
    "is_registered",
    "merge",
    "session_for_url",
]
