# Backend
API_BASE_URL_ENV = "API_BASE_URL"
API_BASE_URL_SECRET = "api_base_url"
APP_URL_ENV = "APP_URL"
APP_URL_SECRET = "app_url"
REQUEST_TIMEOUT = 10  # seconds

# Backend actions
ACTION_PLAYERS = "players"
ACTION_LATEST_SCORES = "latestScores"
ACTION_SUBMIT_SCORE = "submitScore"

# Score entry
SCORE_MIN = 0
SCORE_MAX = 30
PLAYER_SLOTS = 4
STATUS_RESET_SECONDS = 1.5

# Player picker
PICKER_MAX_RESULTS = 20

# Used when the players endpoint can't be read
FALLBACK_PLAYERS = ["Demo Player 1", "Demo Player 2"]

# Recent scores
LATEST_SCORES_LIMIT = 10
SCORES_REFRESH_SECONDS = 15

# Column Names
# Latest scores rows, in backend column order after the timestamp
COL_TEAM1_PLAYER1 = "Team 1 - Player 1"
COL_TEAM1_PLAYER2 = "Team 1 - Player 2"
COL_TEAM2_PLAYER1 = "Team 2 - Player 1"
COL_TEAM2_PLAYER2 = "Team 2 - Player 2"
COL_TEAM1_SCORE = "Team 1 Score"
COL_TEAM2_SCORE = "Team 2 Score"

SCORE_COLUMNS = [
    COL_TEAM1_PLAYER1,
    COL_TEAM1_PLAYER2,
    COL_TEAM2_PLAYER1,
    COL_TEAM2_PLAYER2,
    COL_TEAM1_SCORE,
    COL_TEAM2_SCORE,
]

# Submit form field names, in slot order
PLAYER_FIELDS = ["player1", "player2", "player3", "player4"]
SCORE_FIELDS = ["score1", "score2"]

# Team labels
TEAM_LABELS = ["Team 1", "Team 2"]
