from flask import current_app

from sift.clock import utcnow
from sift.errors import InvalidInput
from sift.extensions import db
from sift.models import ApplicantRound
from sift.models.applicant_round import STATUS_ACCEPTED, STATUS_IN_PROGRESS
from sift.services.decisions import get_applicant_round_or_404
from sift.services.membership import organization_id_for_round, require_privileged
from sift.services.rounds import next_round


def advance_to_next_round(applicant_id, applicant_round_id, requester_id):
    """Put an accepted applicant into the following round of the cycle.

    Returns ``(next_applicant_round, next_recruitment_round)``. Calling it
    again reuses the existing next-round record instead of adding another.
    """
    applicant_round = get_applicant_round_or_404(applicant_id, applicant_round_id)
    current_round = applicant_round.recruitment_round
    organization_id = organization_id_for_round(current_round)
    require_privileged(
        requester_id,
        organization_id,
        message="Only Owner or Admin can move applicants between rounds",
    )

    if applicant_round.status != STATUS_ACCEPTED:
        raise InvalidInput("Applicant must be accepted before moving to the next round")

    following = next_round(current_round)
    if following is None:
        raise InvalidInput("No next round found (you might be at the final round).")

    existing = ApplicantRound.query.filter_by(
        applicant_id=applicant_id, recruitment_round_id=following.id
    ).first()
    if existing:
        if existing.status != STATUS_IN_PROGRESS:
            existing.status = STATUS_IN_PROGRESS
            existing.last_decision = None
            existing.updated_at = utcnow()
        return existing, following

    created = ApplicantRound(
        applicant_id=applicant_id,
        recruitment_round_id=following.id,
        status=STATUS_IN_PROGRESS,
    )
    db.session.add(created)
    db.session.flush()

    current_app.logger.info(
        "Applicant %s moved from round %s to round %s",
        applicant_id,
        current_round.id,
        following.id,
    )
    return created, following
