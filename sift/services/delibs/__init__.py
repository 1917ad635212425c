from sift.services.delibs.results import assign_dense_ranks, compute_results
from sift.services.delibs.session import (
    get_or_create_session,
    get_session_for_round,
    set_session_status,
)
from sift.services.delibs.votes import (
    cast_vote,
    clear_vote,
    get_my_vote,
    list_round_applicants,
)

__all__ = [
    "assign_dense_ranks",
    "cast_vote",
    "clear_vote",
    "compute_results",
    "get_my_vote",
    "get_or_create_session",
    "get_session_for_round",
    "list_round_applicants",
    "set_session_status",
]
