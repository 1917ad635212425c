from sqlalchemy import func

from sift.extensions import db
from sift.models import Applicant, ApplicantRound, DelibsVote
from sift.services.delibs.session import find_session_for_round
from sift.services.membership import (
    count_members,
    get_round_or_404,
    organization_id_for_round,
    require_privileged,
)
from sift.services.rounds import is_last_round

TIE_TOLERANCE = 1e-9


def assign_dense_ranks(rows, tolerance=TIE_TOLERANCE):
    """Set ``rank_dense`` and ``is_tied`` on each row, in place.

    Rows without votes are left unranked. Averages within ``tolerance`` of
    the first average in a group share its rank, and the next group gets
    the following integer (1, 1, 2 rather than 1, 1, 3).
    """
    voted = [row for row in rows if row["vote_count"] > 0]
    voted.sort(key=lambda row: -row["avg_vote"])

    groups = []
    for row in voted:
        if groups and abs(groups[-1][0]["avg_vote"] - row["avg_vote"]) <= tolerance:
            groups[-1].append(row)
        else:
            groups.append([row])

    for rank, group in enumerate(groups, start=1):
        for row in group:
            row["rank_dense"] = rank
            row["is_tied"] = len(group) > 1

    for row in rows:
        if row["vote_count"] == 0:
            row["avg_vote"] = None
            row["rank_dense"] = None
            row["is_tied"] = False

    return rows


def tally_session_votes(session_id):
    totals = (
        db.session.query(
            DelibsVote.applicant_round_id,
            func.sum(DelibsVote.vote_value),
            func.count(DelibsVote.id),
        )
        .filter(DelibsVote.delibs_session_id == session_id)
        .group_by(DelibsVote.applicant_round_id)
        .all()
    )
    return {
        applicant_round_id: (float(vote_sum), int(vote_count))
        for applicant_round_id, vote_sum, vote_count in totals
    }


def count_session_voters(session_id):
    return (
        db.session.query(func.count(func.distinct(DelibsVote.voter_user_id)))
        .filter(DelibsVote.delibs_session_id == session_id)
        .scalar()
        or 0
    )


def build_results(applicant_rows, totals):
    results = []
    for applicant_round, applicant in applicant_rows:
        vote_sum, vote_count = totals.get(applicant_round.id, (0.0, 0))
        results.append(
            {
                "applicant_round_id": applicant_round.id,
                "applicant_id": applicant.id,
                "name": applicant.name,
                "headshot_url": applicant.headshot_url,
                "status": applicant_round.status,
                "avg_vote": vote_sum / vote_count if vote_count else None,
                "vote_count": vote_count,
            }
        )

    assign_dense_ranks(results)

    results.sort(
        key=lambda row: (
            row["rank_dense"] is None,
            row["rank_dense"] or 0,
            row["name"].lower(),
            row["applicant_round_id"],
        )
    )
    return results


def compute_results(round_id, requester_id):
    """Ranked delibs results for a round; Owner/Admin only.

    Recomputed from the vote rows on every call, so it always reflects the
    latest votes, locked or not.
    """
    recruitment_round = get_round_or_404(round_id)
    organization_id = organization_id_for_round(recruitment_round)
    require_privileged(
        requester_id,
        organization_id,
        message="Only Owner or Admin can view delibs results",
    )

    session = find_session_for_round(recruitment_round.id)

    applicant_rows = (
        db.session.query(ApplicantRound, Applicant)
        .join(Applicant, ApplicantRound.applicant_id == Applicant.id)
        .filter(ApplicantRound.recruitment_round_id == recruitment_round.id)
        .all()
    )
    totals = tally_session_votes(session.id) if session else {}

    return {
        "results": build_results(applicant_rows, totals),
        "session": session,
        "round_name": recruitment_round.name,
        "total_members": count_members(organization_id),
        "voter_count": count_session_voters(session.id) if session else 0,
        "is_last_round": is_last_round(recruitment_round),
    }
