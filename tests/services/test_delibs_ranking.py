from sift.services.delibs import assign_dense_ranks


def _row(key, avg_vote, vote_count=2):
    return {"applicant_round_id": key, "avg_vote": avg_vote, "vote_count": vote_count}


def test_dense_rank_shares_rank_and_does_not_skip():
    rows = [
        _row(1, 10.0),
        _row(2, 10.0),
        _row(3, 5.0),
        _row(4, 5.0),
        _row(5, 0.0),
    ]

    assign_dense_ranks(rows)

    assert [row["rank_dense"] for row in rows] == [1, 1, 2, 2, 3]
    assert [row["is_tied"] for row in rows] == [True, True, True, True, False]


def test_dense_rank_orders_by_average_descending_regardless_of_input_order():
    rows = [_row("low", -7.5), _row("high", 7.5), _row("mid", 0.0)]

    assign_dense_ranks(rows)

    ranks = {row["applicant_round_id"]: row["rank_dense"] for row in rows}
    assert ranks == {"high": 1, "mid": 2, "low": 3}
    assert not any(row["is_tied"] for row in rows)


def test_unvoted_rows_are_left_unranked_and_do_not_shift_others():
    rows = [
        _row("a", 5.0),
        _row("unvoted", 0.0, vote_count=0),
        _row("b", -5.0),
    ]

    assign_dense_ranks(rows)

    by_key = {row["applicant_round_id"]: row for row in rows}
    assert by_key["a"]["rank_dense"] == 1
    assert by_key["b"]["rank_dense"] == 2
    assert by_key["unvoted"]["rank_dense"] is None
    assert by_key["unvoted"]["avg_vote"] is None
    assert by_key["unvoted"]["is_tied"] is False


def test_averages_within_tolerance_count_as_a_tie():
    rows = [_row(1, 10 / 3), _row(2, (5 + 5 + 0) / 3), _row(3, 1.0)]

    assign_dense_ranks(rows)

    assert rows[0]["rank_dense"] == rows[1]["rank_dense"] == 1
    assert rows[0]["is_tied"] and rows[1]["is_tied"]
    assert rows[2]["rank_dense"] == 2


def test_empty_input_is_fine():
    assert assign_dense_ranks([]) == []
