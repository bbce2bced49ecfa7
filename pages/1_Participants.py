# FILE: pages/1_Participants.py
import streamlit as st

from roster_core import participants as people
from roster_core.config import load_config, setup_logging
from roster_core.errors import RosterImportError, ValidationError
from roster_core.io import participants_to_dataframe, sample_xlsx_bytes
from roster_core.models import GLOBAL_FIELDS
from roster_core.pipeline import import_global
from roster_core.storage import JsonFileStore
from roster_core.ui_helpers import warning_digest
from roster_core.validation import format_phone_kr

config = load_config()
setup_logging(config.log_level)
store = JsonFileStore(config.data_dir)

st.title("Participants")
st.caption("전체 참가자(마스터) 등록/조회 (프로토타입: 로컬 저장소 저장)")

c1, c2, c3 = st.columns(3)
with c1:
    if st.button("더미 데이터 주입", use_container_width=True):
        mocks = people.inject_mocks(store)
        st.info(f"더미 데이터 {len(mocks)}건을 주입했습니다.")
with c2:
    st.download_button(
        "샘플 엑셀 다운로드",
        data=sample_xlsx_bytes(GLOBAL_FIELDS),
        file_name="global-participants-sample.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
with c3:
    if st.button("전체 초기화", use_container_width=True):
        people.reset(store)
        st.info("전체 참가자 목록을 초기화했습니다.")

# ---------- Manual registration ----------
st.subheader("수동 등록")
with st.form("register", clear_on_submit=True):
    r1, r2 = st.columns(2)
    with r1:
        name = st.text_input("이름 *")
        email = st.text_input("이메일")
        phone = st.text_input("전화번호", placeholder="010-0000-0000")
    with r2:
        company = st.text_input("회사")
        role = st.text_input("직함/역할")
    if st.form_submit_button("등록", type="primary"):
        try:
            people.register(store, name, email, format_phone_kr(phone) if phone.strip() else "", company, role)
            st.success("등록되었습니다.")
        except ValidationError as e:
            st.error(str(e))

# ---------- Upload ----------
st.subheader("엑셀 업로드")
uploaded = st.file_uploader(
    ".xlsx / .xls / .csv (첫 번째 시트, 첫 줄은 헤더)",
    type=["xlsx", "xls", "csv"],
    key="global_upload",
)
if uploaded is not None and st.button("업로드 처리", type="primary"):
    try:
        outcome = import_global(store, uploaded.getvalue(), uploaded.name, config)
        if outcome.remote_message:
            st.warning(outcome.remote_message)
        st.info(outcome.message)
        if outcome.warnings:
            shown, tail = warning_digest(outcome.warnings, config.warning_preview)
            st.warning(f"주의 ({len(outcome.warnings)}건)\n\n" + "\n".join(f"- {w}" for w in shown) + (f"\n\n{tail}" if tail else ""))
    except RosterImportError as e:
        st.error(str(e))

# ---------- List ----------
items = people.load_global(store)
q = st.text_input("검색", placeholder="이름 / 이메일 / 전화 / 회사 / 역할")
filtered = people.search(items, q)
st.caption(f"{len(filtered):,} / {len(items):,} 명")

if filtered:
    df = participants_to_dataframe(filtered, GLOBAL_FIELDS)
    df.insert(0, "id", [p.id or "" for p in filtered])
    df["등록일"] = [p.created_at or "" for p in filtered]
    st.dataframe(df.head(config.preview_rows), use_container_width=True, hide_index=True)

    to_delete = st.selectbox(
        "삭제할 참가자",
        options=[""] + [p.id for p in filtered if p.id],
        format_func=lambda pid: "" if not pid else next(f"{p.name} <{p.email or '-'}>" for p in filtered if p.id == pid),
    )
    if to_delete and st.button("삭제"):
        people.delete(store, to_delete)
        st.rerun()
else:
    st.info("참가자가 없습니다.")
