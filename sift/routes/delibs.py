from flask import current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from sift.errors import InvalidInput
from sift.extensions import db
from sift.routes.params import int_field
from sift.routes.serializers import serialize_session, serialize_vote
from sift.services.delibs import (
    cast_vote,
    clear_vote,
    compute_results,
    get_my_vote,
    get_or_create_session,
    get_session_for_round,
    list_round_applicants,
    set_session_status,
)


def _commit(error_message):
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(error_message)
        return jsonify({"error": f"Database error: {error_message}"}), 500
    return None


def register_delibs_routes(app):
    @app.route("/api/delibs/session", methods=["POST"])
    @login_required
    def create_or_get_delibs_session():
        data = request.get_json(silent=True) or {}
        round_id = int_field(data, "recruitment_round_id")

        session, role, created = get_or_create_session(round_id, current_user.id)
        failure = _commit("Could not create session")
        if failure:
            return failure

        return (
            jsonify(
                {
                    "session": serialize_session(session),
                    "user_role": role,
                    "round_name": session.recruitment_round.name,
                }
            ),
            201 if created else 200,
        )

    @app.route("/api/delibs/session", methods=["GET"])
    @login_required
    def get_delibs_session():
        round_id = int_field(request.args, "recruitment_round_id")
        session, role = get_session_for_round(round_id, current_user.id)

        payload = {"session": serialize_session(session), "user_role": role}
        if session is not None:
            payload["round_name"] = session.recruitment_round.name
        return jsonify(payload)

    @app.route("/api/delibs/session", methods=["PATCH"])
    @login_required
    def update_delibs_session():
        data = request.get_json(silent=True) or {}
        session_id = int_field(data, "session_id", "Missing session_id or action")
        action = data.get("action")
        if not action:
            raise InvalidInput("Missing session_id or action")

        session = set_session_status(session_id, action, current_user.id)
        failure = _commit("Could not update session")
        if failure:
            return failure

        return jsonify({"session": serialize_session(session)})

    @app.route("/api/delibs/vote", methods=["POST"])
    @login_required
    def submit_delibs_vote():
        data = request.get_json(silent=True) or {}
        missing = (
            "Missing required fields: delibs_session_id, applicant_round_id, vote_value"
        )
        session_id = int_field(data, "delibs_session_id", missing)
        applicant_round_id = int_field(data, "applicant_round_id", missing)
        if "vote_value" not in data:
            raise InvalidInput(missing)

        vote, created = cast_vote(
            session_id, applicant_round_id, current_user.id, data["vote_value"]
        )
        failure = _commit("Could not submit vote")
        if failure:
            return failure

        return (
            jsonify(
                {
                    "vote": serialize_vote(vote),
                    "message": "Vote submitted successfully"
                    if created
                    else "Vote updated successfully",
                }
            ),
            201 if created else 200,
        )

    @app.route("/api/delibs/vote", methods=["GET"])
    @login_required
    def get_delibs_vote():
        missing = "Missing required query params: delibs_session_id, applicant_round_id"
        session_id = int_field(request.args, "delibs_session_id", missing)
        applicant_round_id = int_field(request.args, "applicant_round_id", missing)

        vote, session = get_my_vote(session_id, applicant_round_id, current_user.id)
        return jsonify({"vote": serialize_vote(vote), "session_status": session.status})

    @app.route("/api/delibs/vote", methods=["DELETE"])
    @login_required
    def delete_delibs_vote():
        data = request.get_json(silent=True) or {}
        missing = "Missing required fields: delibs_session_id, applicant_round_id"
        session_id = int_field(data, "delibs_session_id", missing)
        applicant_round_id = int_field(data, "applicant_round_id", missing)

        clear_vote(session_id, applicant_round_id, current_user.id)
        failure = _commit("Could not delete vote")
        if failure:
            return failure

        return jsonify({"message": "Vote deleted successfully"})

    @app.route("/api/delibs/applicants", methods=["POST"])
    @login_required
    def delibs_applicants():
        data = request.get_json(silent=True) or {}
        round_id = int_field(data, "recruitment_round_id")

        listing = list_round_applicants(round_id, current_user.id)
        failure = _commit("Could not create session")
        if failure:
            return failure

        session = listing["session"]
        listing["session"] = {"id": session.id, "status": session.status}
        return jsonify(listing)

    @app.route("/api/delibs/results", methods=["GET"])
    @login_required
    def delibs_results():
        round_id = int_field(request.args, "recruitment_round_id")
        summary = compute_results(round_id, current_user.id)

        session = summary["session"]
        summary["session"] = {
            "id": session.id if session else None,
            "status": session.status if session else None,
        }
        return jsonify(summary)
