from sift.clock import utcnow
from sift.extensions import db


class RecruitmentCycle(db.Model):
    __tablename__ = "recruitment_cycles"

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(
        db.Integer, db.ForeignKey("organizations.id"), nullable=False
    )
    name = db.Column(db.String(200), nullable=False)
    archived = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    rounds = db.relationship(
        "RecruitmentRound",
        backref="recruitment_cycle",
        lazy=True,
        order_by="RecruitmentRound.sort_order",
    )
    applicants = db.relationship("Applicant", backref="recruitment_cycle", lazy=True)
