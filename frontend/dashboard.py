import streamlit as st
from api_client import report_json, request_analysis

st.set_page_config(page_title="GitHub PR Analyzer", layout="wide", page_icon="🔍")

st.title("GitHub PR Analyzer 🔍")
st.markdown("Paste a GitHub PR URL to generate a review report (metrics + risk + hotspots + markdown).")

if "result" not in st.session_state:
    st.session_state["result"] = None

col_input, col_button = st.columns([5, 1])
pr_url = col_input.text_input("PR URL", placeholder="https://github.com/vercel/next.js/pull/1", label_visibility="collapsed")

if col_button.button("Analyze", disabled=not pr_url, use_container_width=True):
    st.session_state["result"] = None
    with st.spinner("Analyzing..."):
        data, err = request_analysis(pr_url)
    if err:
        st.error(err)
    else:
        st.session_state["result"] = data

data = st.session_state["result"]
if data:
    pr = data["pr"]
    report = data["report"]
    risk = report["risk"]

    # --- PR pills ---
    p1, p2, p3 = st.columns(3)
    p1.markdown(f"`{pr.get('repo') or 'repo'}`")
    p2.markdown(f"`Author: {pr.get('author') or 'unknown'}`")
    p3.markdown(f"`Risk: {risk['level'].upper()} (score {risk['score']})`")
    st.caption(pr.get("url", ""))

    left, right = st.columns(2)
    with left:
        st.subheader("Metrics")
        m = report["metrics"]
        c1, c2 = st.columns(2)
        c1.metric("Files changed", m["totalFiles"])
        c2.metric("Churn", m["churn"])
        c1.metric("Additions", m["additions"])
        c2.metric("Deletions", m["deletions"])
    with right:
        st.subheader("Risk Reasons")
        if risk["reasons"]:
            st.markdown("\n".join(f"- {r}" for r in risk["reasons"]))
        else:
            st.write("No major risk flags detected.")

    left, right = st.columns(2)
    with left:
        st.subheader("Hotspots")
        st.table([{"Directory": h["dir"], "Churn": h["churn"]} for h in report["hotspots"]])
    with right:
        st.subheader("Biggest changed files")
        st.table([
            {"File": f["filename"], "+": f["additions"], "-": f["deletions"], "Changes": f["changes"]}
            for f in report["biggestFiles"]
        ])

    st.subheader("Markdown Report")
    d1, d2 = st.columns(2)
    d1.download_button("Download Report (Markdown)", data["markdown"], file_name="pr-review-report.md", mime="text/markdown")
    d2.download_button("Download Full JSON", report_json(data), file_name="pr-review-report.json", mime="application/json")
    st.code(data["markdown"], language="markdown")
