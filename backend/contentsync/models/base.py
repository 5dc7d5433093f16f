import uuid
from contentsync.extensions import db
from contentsync.domain.lifecycle.page_record import utcnow


class BaseModel(db.Model):
    """UUID primary key plus creation/modification stamps (timezone-aware)."""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.id}>"
