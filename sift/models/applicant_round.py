from sift.clock import utcnow
from sift.extensions import db

STATUS_IN_PROGRESS = "in_progress"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
STATUS_MAYBE = "maybe"
APPLICANT_ROUND_STATUSES = (
    STATUS_IN_PROGRESS,
    STATUS_ACCEPTED,
    STATUS_REJECTED,
    STATUS_MAYBE,
)


class ApplicantRound(db.Model):
    __tablename__ = "applicant_rounds"
    __table_args__ = (
        db.UniqueConstraint(
            "applicant_id",
            "recruitment_round_id",
            name="uq_applicant_rounds_applicant_round",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    applicant_id = db.Column(db.Integer, db.ForeignKey("applicants.id"), nullable=False)
    recruitment_round_id = db.Column(
        db.Integer, db.ForeignKey("recruitment_rounds.id"), nullable=False
    )
    status = db.Column(db.String(20), nullable=False, default=STATUS_IN_PROGRESS)

    # "accept", "finalize", "reject" or "maybe"; null until a decision is made
    last_decision = db.Column(db.String(20), nullable=True)
    decided_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)
