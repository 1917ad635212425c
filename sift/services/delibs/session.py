"""Open/locked state of the deliberation session attached to a round."""

from flask import current_app
from sqlalchemy.exc import IntegrityError

from sift.clock import utcnow
from sift.errors import InvalidInput, NotFound
from sift.extensions import db
from sift.models import DelibsSession
from sift.models.delibs_session import SESSION_LOCKED, SESSION_OPEN
from sift.services.membership import (
    get_round_or_404,
    organization_id_for_round,
    require_member,
    require_privileged,
)

SESSION_ACTIONS = {"lock": SESSION_LOCKED, "unlock": SESSION_OPEN}


def find_session_for_round(round_id):
    return DelibsSession.query.filter_by(recruitment_round_id=round_id).first()


def load_session(session_id):
    return DelibsSession.query.filter_by(id=session_id).populate_existing().first()


def load_session_for_update(session_id):
    """Fresh read of a session row, locked where the database supports it.

    Vote mutations call this instead of trusting any session already in the
    identity map, since another admin may have locked it since page load.
    """
    return (
        DelibsSession.query.filter_by(id=session_id)
        .populate_existing()
        .with_for_update()
        .first()
    )


def ensure_session(recruitment_round, requester_id):
    """Return ``(session, created)``, creating an open session if none exists.

    Two first requests can race here. The loser's insert hits the unique
    constraint on ``recruitment_round_id`` and rereads the winner's row.
    """
    existing = find_session_for_round(recruitment_round.id)
    if existing:
        return existing, False

    session = DelibsSession(
        recruitment_round_id=recruitment_round.id,
        created_by=requester_id,
        status=SESSION_OPEN,
    )
    try:
        with db.session.begin_nested():
            db.session.add(session)
    except IntegrityError:
        existing = find_session_for_round(recruitment_round.id)
        if existing is None:
            raise
        return existing, False

    current_app.logger.info(
        "Created delibs session %s for round %s", session.id, recruitment_round.id
    )
    return session, True


def get_or_create_session(round_id, requester_id):
    """Return ``(session, role, created)`` for a round the requester belongs to."""
    recruitment_round = get_round_or_404(round_id)
    organization_id = organization_id_for_round(recruitment_round)
    role = require_member(requester_id, organization_id)

    session, created = ensure_session(recruitment_round, requester_id)
    return session, role, created


def get_session_for_round(round_id, requester_id):
    recruitment_round = get_round_or_404(round_id)
    organization_id = organization_id_for_round(recruitment_round)
    role = require_member(requester_id, organization_id, message="Not authorized")
    return find_session_for_round(recruitment_round.id), role


def set_session_status(session_id, action, requester_id):
    if action not in SESSION_ACTIONS:
        raise InvalidInput("Invalid action. Use 'lock' or 'unlock'")

    session = load_session_for_update(session_id)
    if session is None:
        raise NotFound("Session not found")

    organization_id = organization_id_for_round(session.recruitment_round)
    require_privileged(
        requester_id,
        organization_id,
        message="Only Owner or Admin can lock/unlock sessions",
    )

    new_status = SESSION_ACTIONS[action]
    if session.status == new_status:
        return session

    session.status = new_status
    session.locked_at = utcnow() if new_status == SESSION_LOCKED else None
    db.session.flush()

    current_app.logger.info(
        "Delibs session %s set to %s by user %s", session.id, new_status, requester_id
    )
    return session
