# FILE: pages/4_Badges.py
import streamlit as st

from roster_core.badges import BADGE_PRESETS, BadgeOptions, grid_shape, qr_payload, with_ids
from roster_core.checkin import mark_all_checked_in
from roster_core.config import load_config, setup_logging
from roster_core.events import get_event, load_events
from roster_core.export_pdf import render_badges_pdf
from roster_core.roster import load_roster
from roster_core.storage import JsonFileStore
from roster_core.ui_helpers import event_choices

config = load_config()
setup_logging(config.log_level)
store = JsonFileStore(config.data_dir)
ss = st.session_state

st.title("Badges")

choices = event_choices(load_events(store))
if not choices:
    st.warning("먼저 행사를 만들어주세요.")
    st.stop()
labels = list(choices)
default = labels.index(next((k for k, v in choices.items() if v == ss.get("event_id")), labels[0]))
event_id = choices[st.selectbox("행사", labels, index=default)]
ss.event_id = event_id
event = get_event(store, event_id)
event_name = event.name if event else event_id

keys = list(BADGE_PRESETS)
preset_key = st.radio(
    "명찰 크기",
    keys,
    index=keys.index(config.default_badge_preset) if config.default_badge_preset in keys else 0,
    format_func=lambda k: BADGE_PRESETS[k].label,
    horizontal=True,
)
preset = BADGE_PRESETS[preset_key]

c1, c2, c3 = st.columns(3)
with c1:
    show_company = st.checkbox("회사 표시", value=True)
    show_title = st.checkbox("직함 표시", value=True)
with c2:
    show_qr = st.checkbox("QR 표시", value=True)
    qr_label = st.checkbox("QR 하단 ID 표시", value=True)
with c3:
    cut_line = st.checkbox("재단선", value=True)
    font_scale = st.slider("글자 크기", 0.8, 1.4, 1.0, 0.05)

people = with_ids(load_roster(store, event_id))
cols, rows_per_page = grid_shape(preset)
st.caption(f"참가자 {len(people):,}명 · A4 한 장에 {cols * rows_per_page}개 ({cols}×{rows_per_page})")

if not people:
    st.info("명단이 비어 있습니다. Event Roster 페이지에서 업로드하세요.")
    st.stop()

st.dataframe(
    [{"이름": p.name, "회사": p.company or "", "QR": qr_payload(event_id, p.id)} for p in people[:60]],
    use_container_width=True,
    hide_index=True,
)

options = BadgeOptions(
    show_company=show_company,
    show_title=show_title,
    show_qr=show_qr,
    qr_label=qr_label,
    cut_line=cut_line,
    font_scale=font_scale,
)
st.download_button(
    "명찰 PDF 다운로드",
    data=render_badges_pdf(event_name, event_id, people, preset, options),
    file_name=f"badges-{event_id}.pdf",
    mime="application/pdf",
    type="primary",
)

if st.button("데모용: 전체 체크인 처리"):
    mark_all_checked_in(store, event_id, people)
    st.success("전체 체크인 처리 완료")
