from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..core.constants import MAX_RATING, MIN_RATING, RATING_LABELS
from ..core.exceptions import GatewayError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    """Kiosk screens: Home, Check-In, Check-Out.

    Views only render; every read and write goes through the gateway.
    """

    gateway = container.gateway

    def _poll_interval_ms() -> int:
        return int(app.config.get("POLL_INTERVAL_SECONDS", 5)) * 1000

    @app.route("/", methods=["GET"], endpoint="home")
    def home():
        error = None
        try:
            students = gateway.list_checked_in()
        except GatewayError as e:
            logger.warning("Cannot load checked-in list: %s", e.message)
            students, error = [], e.message

        return render_template(
            "kiosk/home.html",
            checked_in_count=len(students),
            can_check_out=bool(students),
            poll_interval_ms=_poll_interval_ms(),
            error=error,
        )

    @app.route("/kiosk/active", methods=["GET"], endpoint="kiosk_active")
    def kiosk_active():
        # Polled by the home screen; staleness up to one interval is fine.
        try:
            students = gateway.list_checked_in()
        except GatewayError as e:
            return jsonify({"error": e.message}), 502
        return jsonify({"count": len(students), "students": students})

    @app.route("/checkin", methods=["GET", "POST"], endpoint="checkin")
    def checkin():
        name = ""
        error = None

        if request.method == "POST":
            name = request.form.get("name", "")
            if not name.strip():
                error = "Please enter a name"
            else:
                try:
                    result = gateway.check_in(name.strip())
                    flash(f"Welcome, {result['student']['name']}! Checked In Successfully!", "success")
                    return redirect(url_for("home"))
                except GatewayError as e:
                    error = e.message

        query = request.args.get("q", "") if request.method == "GET" else name
        show_returning = request.method == "GET" and request.args.get("returning") == "1"
        try:
            if show_returning:
                visitors = gateway.list_visitors()
            else:
                visitors = gateway.search_visitors(query) if query.strip() else []
        except GatewayError as e:
            logger.warning("Cannot load returning visitors: %s", e.message)
            visitors = []
            error = error or e.message

        return render_template(
            "kiosk/checkin.html",
            name=name or query,
            visitors=visitors,
            show_returning=show_returning,
            error=error,
        )

    @app.route("/checkout", methods=["GET", "POST"], endpoint="checkout")
    def checkout():
        error = None
        selected_id = request.values.get("check_in_id", "")
        rating = request.form.get("rating", "") if request.method == "POST" else ""

        if request.method == "POST":
            if not selected_id or not rating:
                error = "Please select a rating"
            else:
                try:
                    result = gateway.check_out(selected_id, rating)
                    flash(f"Goodbye, {result['student']['name']}! Checked Out Successfully!", "success")
                    return redirect(url_for("home"))
                except GatewayError as e:
                    error = e.message

        try:
            students = gateway.list_checked_in()
        except GatewayError as e:
            students = []
            error = error or e.message

        selected = next((s for s in students if str(s.get("check_in_id")) == str(selected_id)), None)
        return render_template(
            "kiosk/checkout.html",
            students=students,
            selected=selected,
            rating=rating,
            ratings=[(v, RATING_LABELS[v]) for v in range(MIN_RATING, MAX_RATING + 1)],
            error=error,
        )
