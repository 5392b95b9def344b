from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.access import login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify({"success": True, "user": s_user.to_dict()})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        payload = {"id": session["user_id"], "name": session.get("name"), "role": session.get("role")}
        if session.get("role") == Role.PARENT.value:
            payload["children"] = container.guardian_service.children_ids(int(session["user_id"]))
        return jsonify(payload)
