from sift.clock import utcnow
from sift.extensions import db

SESSION_OPEN = "open"
SESSION_LOCKED = "locked"


class DelibsSession(db.Model):
    __tablename__ = "delibs_sessions"

    id = db.Column(db.Integer, primary_key=True)
    recruitment_round_id = db.Column(
        db.Integer,
        db.ForeignKey("recruitment_rounds.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=SESSION_OPEN)
    locked_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    votes = db.relationship(
        "DelibsVote",
        backref="delibs_session",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_locked(self):
        return self.status == SESSION_LOCKED
