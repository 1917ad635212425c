from flask import jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash

from sift.models import User


def register_auth_routes(app):
    @app.route("/api/auth/login", methods=["POST"])
    def login():
        data = request.get_json(silent=True) or {}
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""

        user = User.query.filter_by(username=username).first()
        if not user or not check_password_hash(user.password_hash, password):
            return jsonify({"error": "Invalid username or password."}), 401

        login_user(user, remember=bool(data.get("remember")))
        return jsonify({"user": {"id": user.id, "username": user.username}})

    @app.route("/api/auth/logout", methods=["POST"])
    @login_required
    def logout():
        logout_user()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me")
    @login_required
    def me():
        return jsonify({"user": {"id": current_user.id, "username": current_user.username}})
