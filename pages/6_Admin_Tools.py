# FILE: pages/6_Admin_Tools.py
import streamlit as st
from roster_core.config import load_config
from roster_core.validation import run_self_test

st.title("Admin & Self-Test")

if st.button("Run Self-Test"):
    results = run_self_test()
    st.write(results)

st.subheader("Config")
st.json(load_config().model_dump())
