import streamlit as st
from courtscore.score_api import ScoreApi, ScoreApiError, get_app_url
from courtscore.score_form import ScoreEntryForm, SubmitState
from courtscore import config
import logging
import time
import qrcode
import io

logging.basicConfig(level=logging.INFO)


def get_form():
    """Return this session's form, loading players and scores the first time."""
    if "score_form" not in st.session_state:
        try:
            api = ScoreApi()
        except ScoreApiError as e:
            st.error(str(e))
            st.stop()
        form = ScoreEntryForm(api)
        with st.spinner("Loading players…"):
            form.load()
        st.session_state.score_form = form
    return st.session_state.score_form


def render_player_picker(form, slot):
    picker = form.pickers[slot]
    value = form.players[slot]
    key = f"player_query_{slot}"

    # Keep the widget in step with the model before it is drawn
    st.session_state[key] = picker.display(value)

    col1, col2 = st.columns([5, 1])
    with col1:
        st.text_input(
            picker.label,
            key=key,
            placeholder="Search player",
            autocomplete="off",
            on_change=lambda: picker.type(st.session_state[key]),
        )
    with col2:
        st.write("")
        if value:
            st.button("✕", key=f"player_clear_{slot}", on_click=picker.clear, help="Clear")
        elif picker.open:
            st.button("▴", key=f"player_close_{slot}", on_click=picker.dismiss, help="Close list")
        else:
            st.button("▾", key=f"player_open_{slot}", on_click=picker.focus, help="Show players")

    matches = picker.visible_matches(form.candidates_for(slot))
    if matches:
        with st.container(border=True):
            for i, name in enumerate(matches):
                st.button(
                    name,
                    key=f"player_option_{slot}_{i}",
                    on_click=picker.select,
                    args=(name,),
                    type="primary" if name == value else "secondary",
                )


def render_score_input(form, index):
    key = f"score_{index}"
    st.session_state[key] = form.scores[index]
    st.text_input(
        f"Score {index + 1}",
        key=key,
        placeholder=f"{config.SCORE_MIN}-{config.SCORE_MAX}",
        on_change=lambda: form.set_score(index, st.session_state[key]),
    )


def render_status(form):
    status = form.current_status()
    if status == SubmitState.SUCCESS:
        st.success("Saved to sheet.")
    elif status == SubmitState.ERROR and form.submit_error:
        st.error(form.submit_error)


def render_latest_scores(df):
    if df.empty:
        st.info("No scores yet")
        return
    # A table shows names as typed, no markdown formatting
    st.dataframe(df, hide_index=True)


@st.fragment(run_every=config.SCORES_REFRESH_SECONDS)
def latest_scores_section(form):
    form.refresh_scores_if_stale()
    st.subheader("Recent scores")
    render_latest_scores(form.latest_scores)


def display_qr_code(url):
    """Display a QR code for the page at the bottom"""
    st.markdown("---")
    st.subheader("Scan to enter scores on another device")

    qr = qrcode.QRCode(version=1, box_size=10, border=5)
    qr.add_data(url)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    # Convert PIL image to bytes
    img_byte_arr = io.BytesIO()
    img.save(img_byte_arr, format='PNG')
    img_byte_arr = img_byte_arr.getvalue()

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.image(img_byte_arr)
        st.code(url, language=None)


def main():
    st.set_page_config(
        page_title="Court Score Entry",
        page_icon="🏸",
        menu_items=None
    )

    st.title("Court score entry")
    st.caption("Pick players, enter scores, submit.")

    # Add custom CSS
    st.markdown("""
        <style>
        .block-container {
            padding: 1.5rem 1.4rem !important;
        }
        </style>
    """, unsafe_allow_html=True)

    form = get_form()

    if form.load_error:
        st.warning(form.load_error)

    for team in range(len(config.TEAM_LABELS)):
        st.subheader(config.TEAM_LABELS[team])
        for slot in form.team_slots(team):
            render_player_picker(form, slot)

    col1, col2 = st.columns(2)
    with col1:
        render_score_input(form, 0)
    with col2:
        render_score_input(form, 1)

    submitting = form.current_status() == SubmitState.SUBMITTING
    submitted = st.button(
        "Submitting…" if submitting else "Submit score",
        type="primary",
        disabled=not form.can_submit,
    )
    if submitted:
        with st.spinner("Submitting…"):
            saved = form.submit()
        if saved:
            st.success("Saved to sheet.")
            time.sleep(form.reset_delay)  # Give user time to see the success message
            st.rerun()

    render_status(form)

    st.markdown("---")
    latest_scores_section(form)

    app_url = get_app_url()
    if app_url:
        display_qr_code(app_url)


if __name__ == "__main__":
    main()
