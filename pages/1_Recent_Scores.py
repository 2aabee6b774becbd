import html
import streamlit as st
from courtscore.score_api import ScoreApi, ScoreApiError
from courtscore import config

st.set_page_config(
    page_title="Recent Scores - Court Score Entry",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Add custom CSS for large display
st.markdown("""
    <style>
    #MainMenu, footer, header {display: none !important;}
    .block-container {
        padding: 0rem !important;
        max-width: 100% !important;
    }
    .appview-container {
        margin: 0 12px;
    }
    /* Hide stale data */
    div[data-stale="true"] {
        display: none !important;
    }
    .scores-header {
        background-color: #1f77b4;
        color: white;
        padding: 10px;
        font-size: 32px;
        font-weight: bold;
        margin-bottom: 20px;
        border-radius: 5px;
        text-align: center;
    }
    .score-card {
        background-color: #f0f2f6;
        padding: 15px;
        font-size: 36px;
        border-radius: 5px;
        margin-bottom: 10px;
        box-shadow: 0 2px 4px rgba(0,0,0,0.1);
    }
    .score-card .score {
        float: right;
        font-weight: bold;
        color: #1f77b4;
    }
    </style>
""", unsafe_allow_html=True)


# Slightly less than the refresh interval so each refresh sees fresh data
@st.cache_data(ttl=config.SCORES_REFRESH_SECONDS - 1)
def get_latest_scores():
    return ScoreApi().fetch_latest_scores()


def display_scores(scores_df):
    st.markdown('<div class="scores-header">RECENT SCORES</div>', unsafe_allow_html=True)
    if scores_df.empty:
        st.info("No scores yet")
        return

    for _, row in scores_df.iterrows():
        cell = {col: html.escape(str(row[col])) for col in config.SCORE_COLUMNS}
        st.markdown(
            f'<div class="score-card">'
            f'{cell[config.COL_TEAM1_PLAYER1]} & {cell[config.COL_TEAM1_PLAYER2]} vs '
            f'{cell[config.COL_TEAM2_PLAYER1]} & {cell[config.COL_TEAM2_PLAYER2]}'
            f'<span class="score">{cell[config.COL_TEAM1_SCORE]} - {cell[config.COL_TEAM2_SCORE]}</span>'
            f'</div>',
            unsafe_allow_html=True
        )


@st.fragment(run_every=config.SCORES_REFRESH_SECONDS)
def scores_board():
    try:
        scores_df = get_latest_scores()
    except ScoreApiError as e:
        st.error(str(e))
        return
    display_scores(scores_df)


scores_board()
