from sift.models import RecruitmentRound


def last_round_in_cycle(recruitment_cycle_id):
    return (
        RecruitmentRound.query.filter_by(recruitment_cycle_id=recruitment_cycle_id)
        .order_by(RecruitmentRound.sort_order.desc(), RecruitmentRound.id.desc())
        .first()
    )


def is_last_round(recruitment_round):
    last_round = last_round_in_cycle(recruitment_round.recruitment_cycle_id)
    return last_round is not None and last_round.id == recruitment_round.id


def next_round(recruitment_round):
    return (
        RecruitmentRound.query.filter(
            RecruitmentRound.recruitment_cycle_id
            == recruitment_round.recruitment_cycle_id,
            RecruitmentRound.sort_order > recruitment_round.sort_order,
        )
        .order_by(RecruitmentRound.sort_order.asc(), RecruitmentRound.id.asc())
        .first()
    )
