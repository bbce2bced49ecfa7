# FILE: pages/3_Notify.py
import pandas as pd
import streamlit as st

from roster_core.config import load_config, setup_logging
from roster_core.errors import RosterImportError
from roster_core.events import load_events
from roster_core.io import sample_xlsx_bytes
from roster_core.notify import (
    DEFAULT_BODY,
    DEFAULT_SUBJECT,
    MAX_PREVIEW_ROWS,
    RECIPIENT_FIELDS,
    add_rows,
    count_valid_emails,
    detect_email_column,
    pick_recipients,
    read_recipient_file,
    render_message,
    search_candidates,
)
from roster_core.participants import load_global
from roster_core.storage import JsonFileStore
from roster_core.ui_helpers import display_name, event_choices

config = load_config()
setup_logging(config.log_level)
store = JsonFileStore(config.data_dir)
ss = st.session_state

st.title("Notify")

choices = event_choices(load_events(store))
if not choices:
    st.warning("먼저 행사를 만들어주세요.")
    st.stop()
labels = list(choices)
default = labels.index(next((k for k, v in choices.items() if v == ss.get("event_id")), labels[0]))
event_id = choices[st.selectbox("행사", labels, index=default)]
ss.event_id = event_id

ss.setdefault("notify_headers", [])
ss.setdefault("notify_rows", [])

# ---------- Recipients from file ----------
uploaded = st.file_uploader("엑셀/CSV 파일 업로드 (.xlsx / .xls / .csv)", type=["xlsx", "xls", "csv"], key="notify_upload")
if uploaded is not None and st.button("불러오기"):
    try:
        headers, rows = read_recipient_file(uploaded.getvalue(), uploaded.name, config.max_upload_bytes)
        ss.notify_headers, ss.notify_rows = headers, rows
    except RosterImportError as e:
        st.error(str(e))
st.download_button(
    "샘플 수신자 엑셀 다운로드",
    data=sample_xlsx_bytes(RECIPIENT_FIELDS),
    file_name="recipients-sample.xlsx",
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)

# ---------- Recipients from the participant list ----------
with st.expander("DB 참여자에서 추가"):
    candidates = search_candidates(load_global(store), st.text_input("검색", placeholder="이름 / 이메일 / 회사 / 전화"))
    picked = st.multiselect(
        "추가할 참여자",
        options=[p.id for p in candidates if p.id],
        format_func=lambda pid: next(display_name(p) for p in candidates if p.id == pid),
    )
    if st.button("선택 추가", disabled=not picked):
        to_add = pick_recipients(ss.notify_rows, candidates, set(picked))
        ss.notify_rows = add_rows(ss.notify_rows, to_add)
        for h in RECIPIENT_FIELDS:
            if h not in ss.notify_headers:
                ss.notify_headers.append(h)
        st.success(f"{len(to_add)}명을 추가했습니다.")

headers, rows = ss.notify_headers, ss.notify_rows
email_col = detect_email_column(headers)
c1, c2, c3 = st.columns(3)
c1.metric("수신자", f"{len(rows):,}")
c2.metric("유효 이메일", f"{count_valid_emails(rows, email_col):,}")
c3.caption(f"이메일 컬럼: {email_col or '없음'}")

if rows:
    st.dataframe(pd.DataFrame(rows[:MAX_PREVIEW_ROWS], columns=headers), use_container_width=True, hide_index=True)

# ---------- Message ----------
subject = st.text_input("제목", value=DEFAULT_SUBJECT)
body = st.text_area("내용", value=DEFAULT_BODY, height=180)
if rows:
    st.caption("미리보기 (첫 번째 수신자)")
    st.markdown(f"**{render_message(subject, rows[0], event_id)}**")
    st.text(render_message(body, rows[0], event_id))
