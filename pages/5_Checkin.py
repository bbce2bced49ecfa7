# FILE: pages/5_Checkin.py
import streamlit as st

from roster_core.badges import with_ids
from roster_core.checkin import CheckInError, check_in, load_checkins
from roster_core.config import load_config, setup_logging
from roster_core.events import load_events
from roster_core.roster import load_roster
from roster_core.storage import JsonFileStore
from roster_core.ui_helpers import by_id, event_choices

config = load_config()
setup_logging(config.log_level)
store = JsonFileStore(config.data_dir)
ss = st.session_state

st.title("Check-in")
st.caption("QR 스캐너가 읽은 문자열을 입력하세요. (예: EM1|evt_123|p_abcd)")

choices = event_choices(load_events(store))
if not choices:
    st.warning("먼저 행사를 만들어주세요.")
    st.stop()
labels = list(choices)
default = labels.index(next((k for k, v in choices.items() if v == ss.get("event_id")), labels[0]))
event_id = choices[st.selectbox("행사", labels, index=default)]
ss.event_id = event_id

people = by_id(with_ids(load_roster(store, event_id)))

with st.form("scan", clear_on_submit=True):
    text = st.text_input("QR 코드")
    if st.form_submit_button("체크인", type="primary") and text:
        try:
            pid = check_in(store, event_id, text)
            who = people.get(pid)
            st.success(f"체크인 완료: {who.name if who else pid}")
        except CheckInError as e:
            st.error(str(e))

records = load_checkins(store, event_id)
st.metric("체크인", f"{len(records):,} / {len(people):,}")
if records:
    st.dataframe(
        [
            {"id": pid, "이름": people[pid].name if pid in people else "", "시각": rec.get("at", "")}
            for pid, rec in sorted(records.items(), key=lambda kv: kv[1].get("at", ""), reverse=True)
        ][:20],
        use_container_width=True,
        hide_index=True,
    )
