from contentsync.extensions import db
from .base import BaseModel


class PageRecord(BaseModel):
    """
    One row per content page: the draft and the published snapshot.

    Both documents are stored exactly as the last writer sent them;
    they are merged with schema defaults on read, never on write.
    """
    __tablename__ = "cms_pages"

    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    draft_content = db.Column(db.JSON(none_as_null=True), nullable=True)
    published_content = db.Column(db.JSON(none_as_null=True), nullable=True)
    published = db.Column(db.Boolean, nullable=False, default=False, index=True)

    # Set by the write functions only (no onupdate): a draft save bumps
    # updated_at, a publish bumps both.
    updated_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)
