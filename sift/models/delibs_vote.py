from sift.clock import utcnow
from sift.extensions import db

# strong-no, no, neutral, yes, strong-yes
VOTE_VALUES = (-10, -5, 0, 5, 10)


class DelibsVote(db.Model):
    __tablename__ = "delibs_votes"
    __table_args__ = (
        db.UniqueConstraint(
            "delibs_session_id",
            "applicant_round_id",
            "voter_user_id",
            name="uq_delibs_votes_session_applicant_voter",
        ),
        db.CheckConstraint(
            "vote_value IN (-10, -5, 0, 5, 10)", name="ck_delibs_votes_vote_value"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    delibs_session_id = db.Column(
        db.Integer,
        db.ForeignKey("delibs_sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    applicant_round_id = db.Column(
        db.Integer,
        db.ForeignKey("applicant_rounds.id", ondelete="CASCADE"),
        nullable=False,
    )
    voter_user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    vote_value = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    applicant_round = db.relationship("ApplicantRound")
