# FILE: pages/2_Event_Roster.py
import streamlit as st

from roster_core.config import load_config, setup_logging
from roster_core.errors import RosterImportError
from roster_core.events import load_events
from roster_core.io import (
    export_xlsx_bytes,
    participants_to_dataframe,
    sample_xlsx_bytes,
)
from roster_core.models import ALL_FIELDS
from roster_core.pipeline import import_roster
from roster_core.roster import load_roster, preview, reset_roster
from roster_core.storage import JsonFileStore
from roster_core.ui_helpers import event_choices, warning_digest

config = load_config()
setup_logging(config.log_level)
store = JsonFileStore(config.data_dir)
ss = st.session_state

st.title("Event Roster")

choices = event_choices(load_events(store))
if not choices:
    st.warning("먼저 행사를 만들어주세요.")
    st.stop()
labels = list(choices)
default = labels.index(next((k for k, v in choices.items() if v == ss.get("event_id")), labels[0]))
label = st.selectbox("행사", labels, index=default)
event_id = choices[label]
ss.event_id = event_id
st.caption(f"eventId: {event_id}")

# ---------- Upload ----------
uploaded = st.file_uploader(
    "엑셀 파일 업로드 (.xlsx / .xls / .csv, 첫 번째 시트, 첫 줄은 헤더)",
    type=["xlsx", "xls", "csv"],
    key=f"roster_upload_{event_id}",
)
c1, c2, c3 = st.columns(3)
with c1:
    if uploaded is not None and st.button("업로드 처리", type="primary", use_container_width=True):
        try:
            outcome = import_roster(store, event_id, uploaded.getvalue(), uploaded.name, config)
            st.info(outcome.message)
            if outcome.mapping:
                st.caption(f"헤더 매핑: {outcome.mapping}")
            if not outcome.saved:
                st.warning("저장소에 기록하지 못했습니다. 새로고침하면 업로드 결과가 사라질 수 있습니다.")
            if outcome.warnings:
                shown, tail = warning_digest(outcome.warnings, config.warning_preview)
                st.warning(
                    f"주의 ({len(outcome.warnings)}건)\n\n"
                    + "\n".join(f"- {w}" for w in shown)
                    + (f"\n\n{tail}" if tail else "")
                )
        except RosterImportError as e:
            st.error(str(e))
with c2:
    st.download_button(
        "샘플 다운로드",
        data=sample_xlsx_bytes(ALL_FIELDS),
        file_name="participants-sample.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
with c3:
    if st.button("초기화", use_container_width=True):
        reset_roster(store, event_id)
        st.info("초기화 완료 (저장된 명단도 비움)")

# ---------- Table ----------
rows = load_roster(store, event_id)
m1, m2 = st.columns(2)
m1.metric("현재 참가자 수", f"{len(rows):,} 명")
m2.caption("필수 컬럼: 이름 / 나머지는 선택")

if not rows:
    st.info("아직 업로드된 참가자가 없습니다.")
    st.stop()

st.download_button(
    "엑셀 다운로드",
    data=export_xlsx_bytes(rows, ALL_FIELDS),
    file_name=f"participants-{event_id}.xlsx",
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)
shown, hidden = preview(rows, config.preview_rows)
st.dataframe(participants_to_dataframe(shown, ALL_FIELDS), use_container_width=True, hide_index=True)
if hidden:
    st.caption(f"성능을 위해 {config.preview_rows}행까지만 미리보기 표시 중입니다. (다운로드에는 전체 포함)")
