import logging
import re
import time
from enum import Enum

from . import config
from .player_picker import PlayerPicker
from .score_api import ScoreApiError, empty_scores_frame

logger = logging.getLogger(__name__)


class SubmitState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


def parse_score(value):
    """Return the score as an int if it is a whole number within bounds, else None."""
    if value is None:
        return None
    text = str(value).strip()
    # Plain ASCII digits only; int() would also take "1_5" or full-width digits
    if not re.fullmatch(r"[+-]?[0-9]+", text):
        return None
    score = int(text)
    if score < config.SCORE_MIN or score > config.SCORE_MAX:
        return None
    return score


class ScoreEntryForm:
    """State for the doubles score entry form.

    Holds the four player slots (team 1 in slots 0-1, team 2 in slots 2-3),
    the two score fields, the player list, the recent scores table and the
    submit status. One instance lives in each browser session.
    """

    def __init__(self, api, clock=time.monotonic, reset_delay=config.STATUS_RESET_SECONDS):
        self.api = api
        self.clock = clock
        self.reset_delay = reset_delay

        self.players = [""] * config.PLAYER_SLOTS
        self.scores = ["", ""]
        self.pickers = [
            PlayerPicker(f"Player {slot + 1}", self._slot_setter(slot))
            for slot in range(config.PLAYER_SLOTS)
        ]

        self.all_players = []
        self.load_error = None
        self.latest_scores = empty_scores_frame()
        self._scores_fetched_at = None

        self.status = SubmitState.IDLE
        self.submit_error = None
        self._status_since = None

    def _slot_setter(self, slot):
        return lambda name: self.set_player(slot, name)

    # Loading

    def load(self):
        """Fetch players and recent scores. Neither failure blocks the other."""
        self.load_players()
        self.refresh_scores()

    def load_players(self):
        try:
            self.all_players = self.api.fetch_players()
            self.load_error = None
        except ScoreApiError as e:
            logger.warning(f"Players fallback: {str(e)}")
            self.all_players = list(config.FALLBACK_PLAYERS)
            self.load_error = "Couldn't load players, showing demo players."

    def refresh_scores(self):
        self.latest_scores = self.api.fetch_latest_scores()
        self._scores_fetched_at = self.clock()

    def refresh_scores_if_stale(self, max_age=config.SCORES_REFRESH_SECONDS):
        if self._scores_fetched_at is None or self.clock() - self._scores_fetched_at >= max_age:
            self.refresh_scores()

    # Fields

    def set_player(self, slot, name):
        self.players[slot] = name

    def set_score(self, index, value):
        self.scores[index] = value

    def candidates_for(self, slot):
        """Player list without the names already picked in the other slots."""
        taken = {name for i, name in enumerate(self.players) if i != slot and name}
        return [name for name in self.all_players if name not in taken]

    def team_slots(self, index):
        """Slot numbers of the two players on team ``index``."""
        return range(index * 2, index * 2 + 2)

    # Submission

    def current_status(self):
        """Submit status, dropping back to idle once the outcome has been shown long enough."""
        if self.status in (SubmitState.SUCCESS, SubmitState.ERROR):
            if self.clock() - self._status_since >= self.reset_delay:
                self._set_status(SubmitState.IDLE)
        return self.status

    def _set_status(self, status):
        self.status = status
        self._status_since = self.clock()

    @property
    def fields_valid(self):
        if not all(self.players):
            return False
        return all(parse_score(s) is not None for s in self.scores)

    @property
    def can_submit(self):
        return self.fields_valid and self.current_status() != SubmitState.SUBMITTING

    def submit(self):
        """Send the result to the backend and refresh the recent scores.

        Returns True when the result was accepted and the form was cleared.
        On failure the inputs are kept so the user can try again.
        """
        if not self.can_submit:
            return False

        self._set_status(SubmitState.SUBMITTING)
        self.submit_error = None
        scores = [parse_score(s) for s in self.scores]

        try:
            self.api.submit_score(list(self.players), scores)
        except ScoreApiError as e:
            logger.error(f"Error submitting score: {str(e)}")
            self.submit_error = str(e) or "Error submitting score"
            self._set_status(SubmitState.ERROR)
            self.refresh_scores()
            return False

        self._set_status(SubmitState.SUCCESS)
        self.reset()
        self.refresh_scores()
        return True

    def reset(self):
        self.players = [""] * config.PLAYER_SLOTS
        self.scores = ["", ""]
        for picker in self.pickers:
            picker.reset()
