"""Submission intake — validation, configuration, and the GitHub issue relay.

A survey submission becomes one GitHub issue. Nothing here touches
Flask; the HTTP handlers live in survey.app.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import requests

from survey.constants import (
    GITHUB_API_BASE, GITHUB_OWNER_DEFAULT, GITHUB_REPO_DEFAULT,
    ISSUE_LABEL, REQUIRED_FIELDS, UPSTREAM_TIMEOUT_S, USER_AGENT,
)

_log = logging.getLogger("survey.intake")


# ─── Helpers ─────────────────────────────────────────────────────

def to_str(value: Any) -> str:
    """Trimmed string form of a JSON value, spelled the way JavaScript's
    String() spells it: true/false for booleans, 1 rather than 1.0.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def limit_text(text: Optional[str], limit: int = 2000) -> str:
    t = "" if text is None else str(text)
    if len(t) <= limit:
        return t
    return t[:limit] + f" ...[truncated {len(t) - limit} chars]"


def safe_err(e: Optional[BaseException]) -> Optional[Dict[str, str]]:
    if e is None:
        return None
    return {"name": type(e).__name__, "message": str(e)}


# ─── Configuration ───────────────────────────────────────────────

@dataclass(frozen=True)
class IntakeConfig:
    token: str = ""
    owner_default: str = GITHUB_OWNER_DEFAULT
    repo_default: str = GITHUB_REPO_DEFAULT
    api_base: str = GITHUB_API_BASE
    timeout_s: float = UPSTREAM_TIMEOUT_S

    @classmethod
    def from_env(cls, environ=None) -> "IntakeConfig":
        env = os.environ if environ is None else environ
        return cls(
            token=to_str(env.get("GITHUB_TOKEN")),
            owner_default=to_str(env.get("GITHUB_OWNER")) or GITHUB_OWNER_DEFAULT,
            repo_default=to_str(env.get("GITHUB_REPO")) or GITHUB_REPO_DEFAULT,
        )

    @property
    def has_token(self) -> bool:
        return bool(to_str(self.token))

    @property
    def issues_url(self) -> str:
        base = self.api_base.rstrip("/")
        return f"{base}/repos/{self.owner_default}/{self.repo_default}/issues"


# ─── Validation ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Submission:
    language: str
    player_name: str
    Q2_time: str
    Q3_time: str
    Q4_day: str

    def record(self, stamp: str) -> Dict[str, str]:
        """The stored record: server timestamp first, then the answers."""
        return {"timestamp": stamp, **asdict(self)}


@dataclass(frozen=True)
class ValidationResult:
    submission: Optional[Submission]
    missing: List[str] = field(default_factory=list)
    received: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.submission is not None


def validate_submission(payload: Any) -> ValidationResult:
    """Check the five required fields. Never raises.

    Values are coerced to trimmed strings; a payload that isn't a JSON
    object counts as having every field missing.
    """
    body = payload if isinstance(payload, dict) else {}
    received = {
        "language": to_str(body.get("language")),
        "player_name": to_str(body.get("player_name")),
        "Q2_time": to_str(body.get("Q2_time")),
        "Q3_time": to_str(body.get("Q3_time")),
        "Q4_day": to_str(body.get("Q4_day")),
    }
    missing = [name for name in REQUIRED_FIELDS if not received[name]]
    if missing:
        return ValidationResult(submission=None, missing=missing, received=received)
    return ValidationResult(submission=Submission(**received), received=received)


# ─── Issue Relay ─────────────────────────────────────────────────

def format_issue(submission: Submission, stamp: str) -> Dict[str, Any]:
    """Build the GitHub issue payload for one submission."""
    record = submission.record(stamp)
    body = [f"{key}: {value}" for key, value in record.items()]
    body += [
        "",
        "```json",
        json.dumps(record, indent=2, ensure_ascii=False),
        "```",
    ]
    return {
        "title": f"survey:{submission.player_name}",
        "body": "\n".join(body),
        "labels": [ISSUE_LABEL],
    }


class IssueRelay:
    """Creates survey issues through the GitHub REST API.

    One POST per submission, no retries. config.timeout_s is the requests
    timeout: it bounds the connect and each wait between received bytes,
    not the total time of a response that keeps trickling in.
    Network errors surface as requests.RequestException; non-2xx
    responses are returned for the caller to report.
    """

    def __init__(self, config: IntakeConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.config.issues_url

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {to_str(self.config.token)}",
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def create_issue(self, submission: Submission, stamp: str) -> requests.Response:
        payload = format_issue(submission, stamp)
        _log.info("creating issue %r at %s", payload["title"], self.url)
        return self.session.post(
            self.url,
            json=payload,
            headers=self.headers(),
            timeout=self.config.timeout_s,
        )


def issue_summary(response: requests.Response) -> Optional[Dict[str, Any]]:
    """{number, url} from a created-issue response, or None if unparseable."""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return {"number": data.get("number"), "url": data.get("html_url")}
