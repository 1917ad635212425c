from sift.clock import utcnow
from sift.extensions import db


class Applicant(db.Model):
    __tablename__ = "applicants"

    id = db.Column(db.Integer, primary_key=True)
    recruitment_cycle_id = db.Column(
        db.Integer, db.ForeignKey("recruitment_cycles.id"), nullable=True
    )
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    headshot_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    applicant_rounds = db.relationship("ApplicantRound", backref="applicant", lazy=True)
