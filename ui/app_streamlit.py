"""Streamlit table for playing Open Table against the computer."""

from __future__ import annotations

import streamlit as st

from opentable.errors import EngineError
from opentable.service import GameService


def get_service() -> GameService:
    if "game_service" not in st.session_state:
        st.session_state["game_service"] = GameService()
    return st.session_state["game_service"]


def rerun() -> None:
    st.rerun()


def start_match(service: GameService) -> None:
    view = service.start_match()
    st.session_state["match_id"] = view.match_id
    st.session_state.pop("reveal", None)
    st.session_state["last_message"] = "New game started."
    rerun()


def render_hand(view) -> None:
    st.subheader("Your hand")
    cols = st.columns(max(1, len(view.player_hand)))
    for idx, (col, label) in enumerate(zip(cols, view.player_hand_labels)):
        col.write(f"[{idx}] {label}")
    st.write(f"Your score: {view.player_score}")


def render_status(view) -> None:
    st.write(f"Round: {view.round_number}")
    st.write(f"Main deck: {view.stock_size} cards")
    st.write(f"Open table: {view.discard_size} cards")
    if view.discard_top:
        st.write(f"Top of open table: {view.discard_top['label']}")
    st.write(f"Computer holds {view.opponent_hand_size} cards (score {view.opponent_score})")


def render_draw_controls(service: GameService, view) -> None:
    st.subheader("Draw")
    cols = st.columns(2)
    sources = [("Draw from main deck", "stock"), ("Take from open table", "discard")]
    for col, (caption, source) in zip(cols, sources):
        if col.button(caption):
            try:
                st.session_state["reveal"] = service.reveal(view.match_id, source)
                rerun()
            except EngineError as exc:
                st.error(str(exc))


def render_decision_controls(service: GameService, view) -> None:
    reveal = st.session_state["reveal"]
    st.subheader(f"You drew: {reveal.label}")
    options = {f"[{idx}] {label}": idx for idx, label in enumerate(view.player_hand_labels)}
    selection = st.selectbox("Card to swap out", list(options.keys()))
    cols = st.columns(2)
    decision = None
    if cols[0].button("Swap"):
        decision = (True, options[selection])
    if cols[1].button("Discard"):
        decision = (False, None)
    if decision is None:
        return
    try:
        result = service.commit(view.match_id, reveal.token, swap=decision[0], swap_index=decision[1])
    except EngineError as exc:
        st.error(str(exc))
        return
    st.session_state.pop("reveal", None)
    st.session_state["last_message"] = result.message
    rerun()


def render_save_controls(service: GameService, view) -> None:
    with st.sidebar.expander("Save game"):
        player = st.text_input("Player name", value=st.session_state.get("player_name", ""))
        label = st.text_input("Save name", value="")
        if st.button("Save") and player:
            st.session_state["player_name"] = player
            try:
                service.save_match(view.match_id, player, label)
                st.success("Game saved.")
            except EngineError as exc:
                st.error(str(exc))

    with st.sidebar.expander("Load game"):
        for summary in service.list_saves(st.session_state.get("player_name")):
            caption = f"{summary.save_name} (round {summary.round_number})"
            if st.button(caption, key=f"load-{summary.id}"):
                st.session_state["match_id"] = service.load_save(summary.id).match_id
                st.session_state.pop("reveal", None)
                rerun()


def render_game_over(service: GameService, view) -> None:
    st.subheader("Game over")
    st.text(view.message)
    player = st.text_input("Name for the results board", value=st.session_state.get("player_name", ""))
    if st.button("Submit result") and player:
        if service.report_result(view.match_id, player):
            st.success("Result submitted.")
        else:
            st.warning("Result could not be submitted.")


def main() -> None:
    st.set_page_config(page_title="Open Table", layout="wide")
    st.title("Open Table")

    service = get_service()

    st.sidebar.header("Game Controls")
    if st.sidebar.button("Start new game"):
        start_match(service)

    match_id = st.session_state.get("match_id")
    if match_id is None:
        st.info("Start a new game to begin.")
        return

    try:
        view = service.get_view(match_id)
    except EngineError as exc:
        st.error(str(exc))
        return

    if st.sidebar.button("End game now") and not view.is_over:
        service.end_match(match_id)
        st.session_state.pop("reveal", None)
        rerun()

    if st.session_state.get("last_message"):
        st.text(st.session_state["last_message"])

    cols = st.columns(2)
    with cols[0]:
        render_hand(view)
    with cols[1]:
        render_status(view)

    if view.is_over:
        render_game_over(service, view)
        return

    render_save_controls(service, view)
    if "reveal" in st.session_state:
        render_decision_controls(service, view)
    else:
        render_draw_controls(service, view)


if __name__ == "__main__":
    main()
