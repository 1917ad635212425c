"""Accept/reject/maybe/finalize outcomes on an applicant's round.

Decisions only touch ``applicant_rounds``. They do not look at the delibs
session, so they work whether voting is open, locked, or never started.
Moving an accepted applicant into the next round is done separately by
``sift.services.progression``.
"""

from flask import current_app

from sift.clock import utcnow
from sift.errors import InvalidInput, NotFound
from sift.models import ApplicantRound
from sift.models.applicant_round import (
    APPLICANT_ROUND_STATUSES,
    STATUS_ACCEPTED,
    STATUS_IN_PROGRESS,
    STATUS_MAYBE,
    STATUS_REJECTED,
)
from sift.services.membership import organization_id_for_round, require_privileged
from sift.services.rounds import is_last_round

DECISION_STATUSES = {
    "accept": STATUS_ACCEPTED,
    "finalize": STATUS_ACCEPTED,
    "reject": STATUS_REJECTED,
    "maybe": STATUS_MAYBE,
}

# in_progress undoes a decision, so it records none
STATUS_DECISIONS = {
    STATUS_IN_PROGRESS: None,
    STATUS_REJECTED: "reject",
    STATUS_MAYBE: "maybe",
}


def get_applicant_round_or_404(applicant_id, applicant_round_id):
    applicant_round = ApplicantRound.query.filter_by(
        id=applicant_round_id, applicant_id=applicant_id
    ).first()
    if applicant_round is None:
        raise NotFound("Applicant round not found")
    return applicant_round


def _load_for_decision(applicant_id, applicant_round_id, requester_id):
    applicant_round = get_applicant_round_or_404(applicant_id, applicant_round_id)
    organization_id = organization_id_for_round(applicant_round.recruitment_round)
    require_privileged(
        requester_id,
        organization_id,
        message="Only Owner or Admin can make decisions on applicants",
    )
    return applicant_round


def _apply(applicant_round, new_status, last_decision, requester_id):
    if (
        applicant_round.status == new_status
        and applicant_round.last_decision == last_decision
    ):
        return applicant_round, False

    applicant_round.status = new_status
    applicant_round.last_decision = last_decision
    applicant_round.decided_by = requester_id
    applicant_round.updated_at = utcnow()

    current_app.logger.info(
        "Applicant round %s marked %s (%s) by user %s",
        applicant_round.id,
        new_status,
        last_decision,
        requester_id,
    )
    return applicant_round, True


def decide(applicant_id, applicant_round_id, action, requester_id):
    """Record ``action`` and return ``(applicant_round, changed)``.

    ``finalize`` is the last-round form of ``accept``: both set the status
    to accepted, but ``last_decision`` keeps which one was used.
    """
    if action not in DECISION_STATUSES:
        raise InvalidInput(
            "Invalid action. Must be one of: accept, reject, maybe, finalize"
        )

    applicant_round = _load_for_decision(applicant_id, applicant_round_id, requester_id)

    if action == "finalize" and not is_last_round(applicant_round.recruitment_round):
        raise InvalidInput(
            "Cannot finalize an applicant outside the last round; use accept instead"
        )

    return _apply(applicant_round, DECISION_STATUSES[action], action, requester_id)


def change_decision(applicant_id, applicant_round_id, new_status, requester_id):
    """Set the status directly, including back to ``in_progress``.

    Returns ``(applicant_round, changed)``. Accepting picks ``finalize`` or
    ``accept`` for ``last_decision`` from the round's position in the cycle.
    """
    if new_status not in APPLICANT_ROUND_STATUSES:
        raise InvalidInput(
            "Invalid status. Must be one of: " + ", ".join(APPLICANT_ROUND_STATUSES)
        )

    applicant_round = _load_for_decision(applicant_id, applicant_round_id, requester_id)

    if new_status == STATUS_ACCEPTED:
        if is_last_round(applicant_round.recruitment_round):
            last_decision = "finalize"
        else:
            last_decision = "accept"
    else:
        last_decision = STATUS_DECISIONS[new_status]

    return _apply(applicant_round, new_status, last_decision, requester_id)
