import copy
from typing import Any, Dict

from contentsync.domain.exceptions import PageNotFound

from .careers import CAREERS_DEFAULTS, CAREERS_SLUG
from .students import STUDENTS_DEFAULTS, STUDENTS_SLUG

ContentDocument = Dict[str, Any]

# slug -> canonical default document
SCHEMAS: Dict[str, ContentDocument] = {
    CAREERS_SLUG: CAREERS_DEFAULTS,
    STUDENTS_SLUG: STUDENTS_DEFAULTS,
}


def is_registered(slug: str) -> bool:
    return slug in SCHEMAS


def defaults_for(slug: str) -> ContentDocument:
    """
    Return a fresh copy of the defaults registered for `slug`.

    Callers may mutate the result freely; the registered instance
    is never handed out.
    """
    if not is_registered(slug):
        raise PageNotFound(f"No content schema registered for '{slug}'")
    return copy.deepcopy(SCHEMAS[slug])


