"""One vote per (session, applicant round, voter), writable only while open."""

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from sift.clock import utcnow
from sift.errors import InvalidVoteValue, NotFound, RoundMismatch, SessionLocked
from sift.extensions import db
from sift.models import Applicant, ApplicantRound, DelibsVote
from sift.models.delibs_vote import VOTE_VALUES
from sift.services.delibs.session import (
    ensure_session,
    load_session,
    load_session_for_update,
)
from sift.services.membership import (
    get_round_or_404,
    organization_id_for_round,
    require_member,
)


def validate_vote_value(value):
    # bool is an int subclass; False would otherwise pass as 0.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidVoteValue(VOTE_VALUES)
    if value not in VOTE_VALUES:
        raise InvalidVoteValue(VOTE_VALUES)
    return value


def _load_writable_session(session_id, voter_id, locked_message):
    session = load_session_for_update(session_id)
    if session is None:
        raise NotFound("Delibs session not found")

    organization_id = organization_id_for_round(session.recruitment_round)
    require_member(
        voter_id, organization_id, message="Not authorized to vote in this session"
    )

    if session.is_locked:
        raise SessionLocked(locked_message)
    return session


def _update_existing(session_id, applicant_round_id, voter_id, value):
    result = db.session.execute(
        update(DelibsVote)
        .where(
            DelibsVote.delibs_session_id == session_id,
            DelibsVote.applicant_round_id == applicant_round_id,
            DelibsVote.voter_user_id == voter_id,
        )
        .values(vote_value=value, updated_at=utcnow())
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


def _find_vote(session_id, applicant_round_id, voter_id):
    return (
        DelibsVote.query.filter_by(
            delibs_session_id=session_id,
            applicant_round_id=applicant_round_id,
            voter_user_id=voter_id,
        )
        .populate_existing()
        .first()
    )


def upsert_vote(session_id, applicant_round_id, voter_id, value):
    """Write the vote and report whether a new row was inserted.

    Updates first; when no row matched, inserts inside a savepoint. A
    concurrent insert of the same triple makes ours fail on the unique
    constraint, in which case the winner's row is updated instead.
    """
    if _update_existing(session_id, applicant_round_id, voter_id, value):
        return _find_vote(session_id, applicant_round_id, voter_id), False

    now = utcnow()
    vote = DelibsVote(
        delibs_session_id=session_id,
        applicant_round_id=applicant_round_id,
        voter_user_id=voter_id,
        vote_value=value,
        created_at=now,
        updated_at=now,
    )
    try:
        with db.session.begin_nested():
            db.session.add(vote)
    except IntegrityError:
        if not _update_existing(session_id, applicant_round_id, voter_id, value):
            raise
        return _find_vote(session_id, applicant_round_id, voter_id), False

    return vote, True


def cast_vote(session_id, applicant_round_id, voter_id, value):
    value = validate_vote_value(value)
    session = _load_writable_session(
        session_id, voter_id, "Session is locked. Voting is closed."
    )

    applicant_round = db.session.get(ApplicantRound, applicant_round_id)
    if applicant_round is None:
        raise NotFound("Applicant round not found")
    if applicant_round.recruitment_round_id != session.recruitment_round_id:
        raise RoundMismatch()

    vote, created = upsert_vote(session.id, applicant_round.id, voter_id, value)
    current_app.logger.info(
        "User %s %s vote %s on applicant round %s in session %s",
        voter_id,
        "cast" if created else "updated",
        value,
        applicant_round.id,
        session.id,
    )
    return vote, created


def clear_vote(session_id, applicant_round_id, voter_id):
    session = _load_writable_session(
        session_id, voter_id, "Session is locked. Cannot delete vote."
    )

    deleted = DelibsVote.query.filter_by(
        delibs_session_id=session.id,
        applicant_round_id=applicant_round_id,
        voter_user_id=voter_id,
    ).delete(synchronize_session="fetch")
    return deleted > 0


def get_my_vote(session_id, applicant_round_id, voter_id):
    # Readable in any lock state.
    session = load_session(session_id)
    if session is None:
        raise NotFound("Session not found")

    organization_id = organization_id_for_round(session.recruitment_round)
    require_member(voter_id, organization_id, message="Not authorized")

    vote = DelibsVote.query.filter_by(
        delibs_session_id=session.id,
        applicant_round_id=applicant_round_id,
        voter_user_id=voter_id,
    ).first()
    return vote, session


def list_round_applicants(round_id, voter_id):
    """Applicants in a round with the caller's own vote on each.

    Opening the list is what creates the round's session on first access.
    """
    recruitment_round = get_round_or_404(round_id)
    organization_id = organization_id_for_round(recruitment_round)
    role = require_member(voter_id, organization_id)

    session, _ = ensure_session(recruitment_round, voter_id)

    my_votes = {
        vote.applicant_round_id: vote.vote_value
        for vote in DelibsVote.query.filter_by(
            delibs_session_id=session.id, voter_user_id=voter_id
        )
    }

    rows = (
        db.session.query(ApplicantRound, Applicant)
        .join(Applicant, ApplicantRound.applicant_id == Applicant.id)
        .filter(ApplicantRound.recruitment_round_id == recruitment_round.id)
        .all()
    )

    applicants = []
    for applicant_round, applicant in rows:
        applicants.append(
            {
                "applicant_round_id": applicant_round.id,
                "applicant_id": applicant.id,
                "name": applicant.name,
                "headshot_url": applicant.headshot_url,
                "status": applicant_round.status,
                "my_vote": my_votes.get(applicant_round.id),
            }
        )

    applicants.sort(key=lambda row: (row["name"].lower(), row["applicant_round_id"]))

    return {
        "applicants": applicants,
        "session": session,
        "round_name": recruitment_round.name,
        "user_role": role,
        "voted_count": sum(1 for row in applicants if row["my_vote"] is not None),
        "total_count": len(applicants),
    }
