import json
import logging
import os

import pandas as pd
import requests
import streamlit as st
from streamlit.errors import StreamlitAPIException

from . import config

logger = logging.getLogger(__name__)


class ScoreApiError(Exception):
    """Raised when the scoring backend can't be reached or returns something unusable."""


def _read_setting(secret_key, env_key):
    """Look a setting up in Streamlit secrets first, then the environment."""
    try:
        if secret_key in st.secrets:
            return st.secrets[secret_key]
    except (FileNotFoundError, StreamlitAPIException):
        # No secrets.toml, which is normal outside a deployed app
        pass
    return os.getenv(env_key)


def get_api_base_url():
    base_url = _read_setting(config.API_BASE_URL_SECRET, config.API_BASE_URL_ENV)
    if not base_url:
        raise ScoreApiError(
            f"No backend URL found in Streamlit secrets ({config.API_BASE_URL_SECRET}) "
            f"or environment variable {config.API_BASE_URL_ENV}"
        )
    return base_url


def get_app_url():
    return _read_setting(config.APP_URL_SECRET, config.APP_URL_ENV)


def parse_players(data):
    """Turn a players payload into a list of names.

    The backend sends either one row per player (name in the first cell) or a
    flat list of names. Blank names and cells that are not text are dropped.
    """
    if not isinstance(data, list):
        raise ScoreApiError(f"Expected a list of players, got {type(data).__name__}")

    names = []
    for row in data:
        if isinstance(row, list):
            name = row[0] if row else ""
        else:
            name = row
        if isinstance(name, str) and name:
            names.append(name)
    return names


def _to_score(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def decode_score_row(row):
    """Map a backend row to the score columns.

    Position 0 holds the timestamp and is ignored, 1-4 are the players and
    5-6 the team scores.
    """
    cells = list(row[1:1 + len(config.SCORE_COLUMNS)])
    # Pad row with empty strings if it's shorter than expected
    cells = cells + [''] * (len(config.SCORE_COLUMNS) - len(cells))
    record = dict(zip(config.SCORE_COLUMNS, cells))
    record[config.COL_TEAM1_SCORE] = _to_score(record[config.COL_TEAM1_SCORE])
    record[config.COL_TEAM2_SCORE] = _to_score(record[config.COL_TEAM2_SCORE])
    return record


def build_scores_frame(rows, limit=config.LATEST_SCORES_LIMIT):
    """Build the recent scores table, most recent first.

    The first row is the sheet header. Rows arrive in the order they were
    appended, so the last ``limit`` are taken and reversed.
    """
    data = [row for row in rows[1:] if isinstance(row, list)]
    if limit is not None:
        data = data[-limit:] if limit > 0 else []
    records = [decode_score_row(row) for row in reversed(data)]
    return pd.DataFrame(records, columns=config.SCORE_COLUMNS)


def empty_scores_frame():
    return pd.DataFrame(columns=config.SCORE_COLUMNS)


class ScoreApi:
    """Client for the spreadsheet-backed scoring endpoint."""

    def __init__(self, base_url=None, session=None, timeout=config.REQUEST_TIMEOUT):
        self.base_url = base_url or get_api_base_url()
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_json(self, action):
        try:
            response = self.session.get(
                self.base_url,
                params={'action': action},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ScoreApiError(f"Error fetching {action}: {str(e)}") from e

        # The backend answers with JSON wrapped in a text/plain response
        try:
            return json.loads(response.text)
        except ValueError as e:
            raise ScoreApiError(f"Error parsing {action} response: {str(e)}") from e

    def fetch_players(self):
        """Return the player names known to the backend."""
        names = parse_players(self._get_json(config.ACTION_PLAYERS))
        logger.info(f"Loaded {len(names)} players")
        return names

    def fetch_latest_scores(self, limit=config.LATEST_SCORES_LIMIT):
        """Return the recent scores as a DataFrame, or an empty one on any failure."""
        try:
            rows = self._get_json(config.ACTION_LATEST_SCORES)
            if not isinstance(rows, list):
                raise ScoreApiError(f"Expected a list of score rows, got {type(rows).__name__}")
            df = build_scores_frame(rows, limit)
            logger.info(f"Loaded {len(df)} recent scores")
            return df
        except ScoreApiError as e:
            logger.error(str(e))
            return empty_scores_frame()

    def submit_score(self, players, scores):
        """Post one match result.

        ``players`` holds the four names in slot order and ``scores`` the two
        team scores. Any 2xx answer counts as saved unless the body is JSON
        carrying ``ok: false``.
        """
        body = {'action': config.ACTION_SUBMIT_SCORE}
        body.update(zip(config.PLAYER_FIELDS, players))
        body.update(zip(config.SCORE_FIELDS, [str(s) for s in scores]))

        try:
            # Form encoding keeps this a simple request for the backend
            response = self.session.post(self.base_url, data=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ScoreApiError(f"Error submitting score: {str(e)}") from e

        try:
            data = json.loads(response.text)
        except ValueError:
            logger.info("Submit returned a non-JSON body, treating it as saved")
            return True

        if isinstance(data, dict) and data.get('ok') is False:
            raise ScoreApiError(data.get('error') or "Submit failed")

        logger.info(f"Submitted score {body['score1']}-{body['score2']}")
        return True
