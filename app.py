# app.py
from datetime import datetime, time

import streamlit as st

from roster_core.config import ensure_assets_exist, load_config, setup_logging, ui_css
from roster_core.checkin import load_checkins
from roster_core.errors import EventValidationError
from roster_core.events import (
    KST,
    create_event,
    event_status,
    format_kst,
    load_events,
    status_label,
)
from roster_core.roster import load_roster
from roster_core.storage import JsonFileStore


# ---------- Page & Theme ----------
st.set_page_config(page_title="Event Manager", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

ensure_assets_exist()
config = load_config()
setup_logging(config.log_level)
store = JsonFileStore(config.data_dir)

# ---------- Session State ----------
ss = st.session_state
ss.setdefault("event_id", None)

st.title("Events")
st.caption("행사 목록 / 생성 (프로토타입: 로컬 저장소 저장)")

events = load_events(store)

# ---------- Create event ----------
with st.expander("➕ 새 행사 만들기", expanded=not events):
    with st.form("new_event", clear_on_submit=True):
        name = st.text_input("행사명 *")
        location = st.text_input("장소")
        c1, c2 = st.columns(2)
        today = datetime.now(KST).date()
        with c1:
            start_date = st.date_input("시작일 *", value=today)
            start_time = st.time_input("시작 시간 *", value=time(10, 0))
        with c2:
            end_date = st.date_input("종료일 *", value=today)
            end_time = st.time_input("종료 시간 *", value=time(12, 0))
        submitted = st.form_submit_button("저장", type="primary")

    if submitted:
        try:
            ev = create_event(
                store,
                name,
                datetime.combine(start_date, start_time),
                datetime.combine(end_date, end_time),
                location,
            )
            ss.event_id = ev.id
            st.success(f"'{ev.name}' 행사를 만들었습니다.")
            events = load_events(store)
        except EventValidationError as e:
            st.error(str(e))

# ---------- Event list ----------
if not events:
    st.info("등록된 행사가 없습니다.")
    st.stop()

for ev in events:
    status = event_status(ev)
    with st.container(border=True):
        c1, c2, c3 = st.columns([4, 2, 1])
        with c1:
            st.markdown(f"**{ev.name}**")
            st.caption(f"eventId: {ev.id}")
            st.write(f"{format_kst(ev.start_at)} ~ {format_kst(ev.end_at)}")
            if ev.location:
                st.caption(ev.location)
        with c2:
            roster = load_roster(store, ev.id)
            checked = load_checkins(store, ev.id)
            st.metric("참가자", f"{len(roster):,} 명")
            st.caption(f"체크인 {len(checked):,} 명")
        with c3:
            st.markdown(f"`{status_label(status)}`")
            if st.button("선택", key=f"pick_{ev.id}", use_container_width=True):
                ss.event_id = ev.id
                st.rerun()

if ss.event_id:
    st.success(
        f"선택된 행사: {ss.event_id}. 왼쪽 메뉴의 Roster / Notify / Badges / Check-in 페이지에서 이어서 작업하세요."
    )
