from sift.clock import utcnow
from sift.extensions import db


class RecruitmentRound(db.Model):
    __tablename__ = "recruitment_rounds"

    id = db.Column(db.Integer, primary_key=True)
    recruitment_cycle_id = db.Column(
        db.Integer, db.ForeignKey("recruitment_cycles.id"), nullable=False
    )
    name = db.Column(db.String(200), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    applicant_rounds = db.relationship(
        "ApplicantRound", backref="recruitment_round", lazy=True
    )
    delibs_session = db.relationship(
        "DelibsSession",
        backref="recruitment_round",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
