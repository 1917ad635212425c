from flask import current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from sift.errors import InvalidInput
from sift.extensions import db
from sift.routes.params import int_field
from sift.routes.serializers import serialize_applicant_round
from sift.services.decisions import change_decision, decide
from sift.services.progression import advance_to_next_round

DECISION_MESSAGES = {
    "accept": "Applicant accepted successfully.",
    "finalize": "Applicant accepted successfully (final round).",
    "reject": "Applicant rejected successfully.",
    "maybe": "Applicant marked as maybe successfully.",
}


def _applicant_ids(data):
    missing = "Missing required fields: applicant_id, applicant_round_id"
    return (
        int_field(data, "applicant_id", missing),
        int_field(data, "applicant_round_id", missing),
    )


def register_applicant_routes(app):
    @app.route(
        "/api/applicant/<any(accept, reject, maybe, finalize):action>",
        methods=["POST"],
    )
    @login_required
    def applicant_decision(action):
        applicant_id, applicant_round_id = _applicant_ids(
            request.get_json(silent=True) or {}
        )
        applicant_round, changed = decide(
            applicant_id, applicant_round_id, action, current_user.id
        )

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(
                "Could not record %s for applicant round %s", action, applicant_round_id
            )
            return jsonify({"error": "Database error: Could not update applicant"}), 500

        return jsonify(
            {
                "message": DECISION_MESSAGES[action],
                "applicant_round": serialize_applicant_round(applicant_round),
                "changed": changed,
            }
        )

    @app.route("/api/applicant/change-decision", methods=["POST"])
    @login_required
    def change_applicant_decision():
        data = request.get_json(silent=True) or {}
        new_status = data.get("new_status")
        if not new_status:
            raise InvalidInput(
                "Missing required fields: applicant_id, applicant_round_id, new_status"
            )
        applicant_id, applicant_round_id = _applicant_ids(data)

        applicant_round, changed = change_decision(
            applicant_id, applicant_round_id, new_status, current_user.id
        )

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(
                "Could not change decision for applicant round %s", applicant_round_id
            )
            return jsonify({"error": "Database error: Could not update applicant"}), 500

        return jsonify(
            {
                "message": f"Applicant status changed to {new_status} successfully.",
                "applicant_round": serialize_applicant_round(applicant_round),
                "changed": changed,
            }
        )

    @app.route("/api/applicant/advance", methods=["POST"])
    @login_required
    def advance_applicant():
        applicant_id, applicant_round_id = _applicant_ids(
            request.get_json(silent=True) or {}
        )
        next_applicant_round, following = advance_to_next_round(
            applicant_id, applicant_round_id, current_user.id
        )

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(
                "Could not move applicant %s to the next round", applicant_id
            )
            return jsonify({"error": "Database error: Could not move applicant"}), 500

        return jsonify(
            {
                "message": "Moved applicant to the next round successfully.",
                "applicant_round": serialize_applicant_round(next_applicant_round),
                "next_round": {
                    "id": following.id,
                    "name": following.name,
                    "sort_order": following.sort_order,
                },
            }
        )
