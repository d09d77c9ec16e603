# app.py — Flask app exposing /api/submit and /api/health
from __future__ import annotations

import json
import logging
import os
import uuid
from typing import Any, Dict, Optional

import requests
from flask import Blueprint, Flask, Response, jsonify, request

from survey.constants import CORS_HEADERS, UPSTREAM_BODY_LIMIT
from survey.intake import (
    IntakeConfig, IssueRelay,
    issue_summary, limit_text, safe_err, validate_submission,
)
from survey.timestamps import utc_stamp

_log = logging.getLogger("survey.intake")

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

UPSTREAM_HINT = [
    "1) Check that GITHUB_TOKEN can create issues on the repository",
    "2) Check the owner/repo names",
    "3) GitHub may be rate limiting or having an outage",
]

BODY_EXAMPLE = {
    "language": "en",
    "player_name": "TEST",
    "Q2_time": "A",
    "Q3_time": "B",
    "Q4_day": "C",
}


# ----------------------------
# Helpers
# ----------------------------

def _json(status: int, obj: Optional[Dict[str, Any]]) -> Response:
    """JSON response with CORS and no-store headers. 204 has no body."""
    if status == 204:
        resp = Response(status=204)
    else:
        resp = jsonify(obj)
        resp.status_code = status
    resp.headers.update(CORS_HEADERS)
    resp.headers["Cache-Control"] = "no-store"
    return resp


def _ray() -> str:
    return request.headers.get("cf-ray", "")


# ----------------------------
# Blueprint
# ----------------------------

def make_blueprint(config: IntakeConfig, relay: Optional[IssueRelay] = None) -> Blueprint:
    """Bind the handlers to one configuration and relay."""
    relay = relay or IssueRelay(config)
    bp = Blueprint("intake", __name__, url_prefix="/api")

    @bp.route("/health", methods=ALL_METHODS)
    def api_health():
        return _json(200, {
            "ok": True,
            "message": "Survey intake is alive",
            "method": request.method,
            "path": request.path,
            "hasToken": config.has_token,
            "time": utc_stamp(),
            "ray": _ray(),
            "remoteAddr": request.remote_addr,
            "userAgent": request.headers.get("User-Agent", ""),
        })

    @bp.route("/submit", methods=ALL_METHODS)
    def api_submit():
        request_id = str(uuid.uuid4())
        now = utc_stamp()
        meta = {"requestId": request_id, "time": now, "ray": _ray()}

        if request.method == "OPTIONS":
            return _json(204, None)

        if request.method != "POST":
            return _json(405, {
                "ok": False,
                "error": "Use POST only.",
                "hint": {
                    "url": "/api/submit",
                    "method": "POST",
                    "headers": {"Content-Type": "application/json"},
                    "body_example": BODY_EXAMPLE,
                },
                **meta,
            })

        if not config.has_token:
            _log.warning("submit rejected: GITHUB_TOKEN not configured requestId=%s", request_id)
            return _json(500, {
                "ok": False,
                "error": "Missing GITHUB_TOKEN in server configuration.",
                **meta,
            })

        try:
            payload = json.loads(request.get_data(as_text=True))
        except ValueError as e:
            _log.warning("submit rejected: invalid JSON requestId=%s: %s", request_id, e)
            return _json(400, {
                "ok": False,
                "error": "Invalid JSON body.",
                "detail": safe_err(e),
                **meta,
            })

        result = validate_submission(payload)
        if not result.ok:
            _log.warning("submit rejected: missing %s requestId=%s", result.missing, request_id)
            return _json(400, {
                "ok": False,
                "error": "Missing required fields.",
                "missing": result.missing,
                "received": result.received,
                **meta,
            })

        try:
            gh = relay.create_issue(result.submission, now)
        except requests.RequestException as e:
            _log.error("GitHub request failed requestId=%s url=%s: %s", request_id, relay.url, e)
            return _json(503, {
                "ok": False,
                "stage": "fetch_github",
                "error": "Upstream request failed (GitHub).",
                "detail": safe_err(e),
                "timeoutMs": int(config.timeout_s * 1000),
                "ghUrl": relay.url,
                **meta,
            })

        if not 200 <= gh.status_code < 300:
            _log.error("GitHub returned %s requestId=%s body=%s",
                       gh.status_code, request_id, (gh.text or "")[:800])
            return _json(502, {
                "ok": False,
                "stage": "github_non_2xx",
                "error": "GitHub API returned error.",
                "githubStatus": gh.status_code,
                "githubStatusText": gh.reason or "",
                "githubBody": limit_text(gh.text, UPSTREAM_BODY_LIMIT),
                "hint": UPSTREAM_HINT,
                **meta,
            })

        issue = issue_summary(gh)
        _log.info("submitted requestId=%s issue=%s", request_id, issue)
        return _json(200, {
            "ok": True,
            "message": "Submitted.",
            **meta,
            "issue": issue,
        })

    return bp


# ----------------------------
# App factory
# ----------------------------

def create_app(config: Optional[IntakeConfig] = None, relay: Optional[IssueRelay] = None) -> Flask:
    config = config or IntakeConfig.from_env()
    app = Flask(__name__)
    app.register_blueprint(make_blueprint(config, relay))
    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    port = int(os.getenv("PORT", "8000"))
    app.run(host="0.0.0.0", port=port)
