import pytest

from sift.errors import Forbidden, InvalidInput, NotFound
from sift.models import DelibsSession
from sift.services.delibs import (
    get_or_create_session,
    get_session_for_round,
    set_session_status,
)


def test_get_or_create_is_idempotent(db_session, first_round, member_user, owner_user):
    session, role, created = get_or_create_session(first_round.id, member_user.id)
    db_session.commit()

    assert created is True
    assert role == "Member"
    assert session.status == "open"
    assert session.created_by == member_user.id
    assert session.locked_at is None

    again, owner_role, created_again = get_or_create_session(
        first_round.id, owner_user.id
    )
    assert created_again is False
    assert owner_role == "Owner"
    assert again.id == session.id
    assert DelibsSession.query.filter_by(recruitment_round_id=first_round.id).count() == 1


def test_get_or_create_requires_membership(first_round, outsider_user):
    with pytest.raises(Forbidden):
        get_or_create_session(first_round.id, outsider_user.id)
    assert DelibsSession.query.count() == 0


def test_get_or_create_unknown_round(organization, member_user):
    with pytest.raises(NotFound):
        get_or_create_session(9999, member_user.id)


def test_get_session_for_round_never_creates(first_round, member_user):
    session, role = get_session_for_round(first_round.id, member_user.id)
    assert session is None
    assert role == "Member"
    assert DelibsSession.query.count() == 0


def test_lock_and_unlock_stamp_locked_at(db_session, first_round, admin_user):
    session, _, _ = get_or_create_session(first_round.id, admin_user.id)
    db_session.commit()

    locked = set_session_status(session.id, "lock", admin_user.id)
    db_session.commit()
    assert locked.status == "locked"
    assert locked.locked_at is not None

    locked_at = locked.locked_at
    relocked = set_session_status(session.id, "lock", admin_user.id)
    assert relocked.status == "locked"
    assert relocked.locked_at == locked_at

    unlocked = set_session_status(session.id, "unlock", admin_user.id)
    db_session.commit()
    assert unlocked.status == "open"
    assert unlocked.locked_at is None


def test_members_cannot_lock(db_session, first_round, member_user):
    session, _, _ = get_or_create_session(first_round.id, member_user.id)
    db_session.commit()

    with pytest.raises(Forbidden):
        set_session_status(session.id, "lock", member_user.id)

    db_session.refresh(session)
    assert session.status == "open"


def test_invalid_action_is_rejected(db_session, first_round, owner_user):
    session, _, _ = get_or_create_session(first_round.id, owner_user.id)
    db_session.commit()

    with pytest.raises(InvalidInput):
        set_session_status(session.id, "close", owner_user.id)


def test_missing_session(organization, owner_user):
    with pytest.raises(NotFound):
        set_session_status(12345, "lock", owner_user.id)
