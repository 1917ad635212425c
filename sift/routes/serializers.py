def _isoformat(value):
    return value.isoformat() if value is not None else None


def serialize_session(session):
    if session is None:
        return None
    return {
        "id": session.id,
        "recruitment_round_id": session.recruitment_round_id,
        "created_by": session.created_by,
        "status": session.status,
        "locked_at": _isoformat(session.locked_at),
        "created_at": _isoformat(session.created_at),
    }


def serialize_vote(vote):
    if vote is None:
        return None
    return {
        "id": vote.id,
        "delibs_session_id": vote.delibs_session_id,
        "applicant_round_id": vote.applicant_round_id,
        "voter_user_id": vote.voter_user_id,
        "vote_value": vote.vote_value,
        "created_at": _isoformat(vote.created_at),
        "updated_at": _isoformat(vote.updated_at),
    }


def serialize_applicant_round(applicant_round):
    return {
        "id": applicant_round.id,
        "applicant_id": applicant_round.applicant_id,
        "recruitment_round_id": applicant_round.recruitment_round_id,
        "status": applicant_round.status,
        "last_decision": applicant_round.last_decision,
        "decided_by": applicant_round.decided_by,
        "updated_at": _isoformat(applicant_round.updated_at),
    }
