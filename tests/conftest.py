import json

import pytest
import requests

from courtscore import config
from courtscore.score_api import ScoreApiError, build_scores_frame

BASE_URL = "https://backend.example/exec"


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")


class FakeSession:
    """Stands in for requests.Session, answering GETs by action."""

    def __init__(self, responses=None, post_response=None):
        self.responses = dict(responses or {})
        self.post_response = post_response or FakeResponse({'ok': True})
        self.gets = []
        self.posts = []

    def get(self, url, params=None, timeout=None):
        self.gets.append((url, params))
        response = self.responses[params['action']]
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, data=None, timeout=None):
        self.posts.append((url, data))
        if isinstance(self.post_response, Exception):
            raise self.post_response
        return self.post_response


class FakeApi:
    """In-memory stand-in for ScoreApi."""

    def __init__(self, players=None, score_rows=None, players_error=None, submit_error=None):
        self.players = players or []
        self.score_rows = score_rows or [["Timestamp"]]
        self.players_error = players_error
        self.submit_error = submit_error
        self.submitted = []
        self.score_fetches = 0

    def fetch_players(self):
        if self.players_error:
            raise ScoreApiError(self.players_error)
        return list(self.players)

    def fetch_latest_scores(self, limit=config.LATEST_SCORES_LIMIT):
        self.score_fetches += 1
        return build_scores_frame(self.score_rows, limit)

    def submit_score(self, players, scores):
        self.submitted.append((players, scores))
        if self.submit_error:
            raise ScoreApiError(self.submit_error)
        self.score_rows.append(["now"] + list(players) + list(scores))
        return True


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def score_rows():
    return [
        ["Timestamp", "Player 1", "Player 2", "Player 3", "Player 4", "Score 1", "Score 2"],
        ["2025-01-03 10:00", "Erin", "Frank", "Grace", "Heidi", "11", "9"],
        ["2025-01-03 10:20", "Ivan", "Judy", "Mallory", "Niaj", "7", "11"],
    ]
