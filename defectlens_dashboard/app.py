import html
import streamlit as st
import sys
from pathlib import Path

project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from defectlens_dashboard.core.theme import load_theme, page_header, metric_card
from defectlens_dashboard.services.api_client import GatewayClient, AnalysisRequestError
from defectlens_dashboard.services.payloads import (
    PLATFORMS, SocialPost, build_manual_payload, build_platform_payload, build_posts_payload
)
from defectlens_dashboard.utils.risk_colors import (
    risk_badge, health_color, category_icon, severity_counts
)

st.set_page_config(
    page_title="DefectLens Content Analysis",
    page_icon="🔍",
    layout="wide"
)

load_theme()
page_header("🔍 Content Analysis", "AI-powered defect detection for websites and social platforms")

client = GatewayClient()

with st.sidebar:
    st.markdown("### 🩺 Gateway")
    gateway = client.health()
    if gateway.get("status") == "healthy":
        st.success(f"Online · v{gateway.get('version', '?')}")
        if not gateway.get("ai_configured"):
            st.warning("AI service not configured")
        for engine, report in (gateway.get("upstream") or {}).items():
            st.caption(f"{engine}: {report.get('status')} ({report.get('error_rate')} errors)")
    else:
        st.error("Gateway unreachable")

for key, default in {"analysis": None, "analysis_error": None, "pending": None, "batch_posts": [], "toast": None}.items():
    if key not in st.session_state:
        st.session_state[key] = default

busy = st.session_state.pending is not None

if st.session_state.toast:
    message, icon = st.session_state.toast
    st.toast(message, icon=icon)
    st.session_state.toast = None

def submit(website_data, source_url):
    st.session_state.pending = (website_data, source_url)
    st.session_state.analysis = None
    st.session_state.analysis_error = None
    st.rerun()

platform_keys = list(PLATFORMS)

def platform_name(key: str) -> str:
    return f"{PLATFORMS[key]['icon']} {PLATFORMS[key]['label']}"

tab_manual, tab_social = st.tabs(["📝 Paste Content", "📱 Social Media"])

with tab_manual:
    source = st.text_input("Content source (optional)", placeholder="e.g. Landing page draft", key="manual_source")
    content = st.text_area("Paste HTML or text content", height=240, key="manual_content")
    if st.button("🔍 Analyze Content", disabled=busy or not content.strip(), key="analyze_manual", width="stretch"):
        submit(*build_manual_payload(content, source))

with tab_social:
    mode = st.radio("Analysis type", ["Platform UX", "Post Content"], horizontal=True, key="social_mode")

    if mode == "Platform UX":
        st.caption("Find defects like slow loading, scrolling issues and video problems on social platforms.")
        platform = st.selectbox("Platform", platform_keys, format_func=platform_name, key="ux_platform")
        platform_url = st.text_input("Platform or profile URL", key="ux_url")
        reported = st.text_area("Issues you have noticed (optional)", key="ux_reported")
        if st.button("🔍 Analyze Platform", disabled=busy or not platform_url.strip(), key="analyze_platform", width="stretch"):
            submit(*build_platform_payload(platform, platform_url, reported))
    else:
        post_platform = st.selectbox("Platform", platform_keys, format_func=platform_name, key="post_platform")
        with st.form("post_form"):
            c1, c2 = st.columns(2)
            with c1:
                post_type = st.selectbox("Post type", PLATFORMS[post_platform]["post_types"])
                hashtags = st.text_input("Hashtags")
                mentions = st.text_input("Mentions")
                post_date = st.text_input("Post date")
            with c2:
                likes = st.text_input("Likes")
                comments = st.text_input("Comments")
                shares = st.text_input("Shares")
                views = st.text_input("Views")
                engagement_rate = st.text_input("Engagement rate")
            caption = st.text_area("Caption / text", placeholder="Paste your social media post content here...")
            extra = st.text_area("Additional context")
            add_to_batch = st.form_submit_button("➕ Add to batch")
            analyze_post = st.form_submit_button("🔍 Analyze", disabled=busy)

        post = SocialPost(
            platform=post_platform, post_type=post_type, caption=caption, hashtags=hashtags,
            mentions=mentions, likes=likes, comments=comments, shares=shares, views=views,
            engagement_rate=engagement_rate, post_date=post_date, additional_context=extra,
        )

        if add_to_batch:
            if caption.strip():
                st.session_state.batch_posts.append(post)
                st.toast("Post added to batch")
            else:
                st.warning("Add a caption before adding the post to the batch.")

        batch = st.session_state.batch_posts
        if batch:
            st.markdown(f"**Batch ({len(batch)} posts)**")
            for i, queued in enumerate(batch):
                col_text, col_remove = st.columns([0.9, 0.1])
                col_text.write(f"{platform_name(queued.platform)} · {queued.post_type}: {queued.caption[:80]}")
                if col_remove.button("✖", key=f"remove_post_{i}"):
                    batch.pop(i)
                    st.rerun()

        if analyze_post:
            if batch:
                submit(*build_posts_payload(batch, post_platform))
            elif caption.strip():
                submit(*build_posts_payload([post], post_platform))
            else:
                st.warning("Paste a caption or add posts to the batch first.")

if busy:
    website_data, source_url = st.session_state.pending
    with st.spinner("🧠 Analyzing content with AI..."):
        try:
            st.session_state.analysis = client.analyze(website_data, source_url)
            st.session_state.toast = ("Content analysis complete!", "✅")
        except AnalysisRequestError as e:
            st.session_state.analysis_error = e.message
        except Exception as e:
            st.session_state.analysis_error = str(e) or "Analysis failed"
        finally:
            st.session_state.pending = None
    if st.session_state.analysis_error:
        st.session_state.toast = (st.session_state.analysis_error, "❌")
    st.rerun()

if st.session_state.analysis_error:
    st.error(st.session_state.analysis_error)

analysis = st.session_state.analysis
if analysis is not None:
    st.divider()
    col_score, col_risk, col_counts = st.columns([0.3, 0.3, 0.4])
    with col_score:
        st.markdown(metric_card(f"{analysis.health_score:.0f}", "Health Score", health_color(analysis.health_score)), unsafe_allow_html=True)
    with col_risk:
        st.markdown("**Risk Level**")
        st.markdown(risk_badge(analysis.risk_level), unsafe_allow_html=True)
    with col_counts:
        counts = severity_counts(analysis.current_defects)
        st.markdown("**Current issues by severity**")
        st.write(" · ".join(f"{level.title()}: {n}" for level, n in counts.items()))

    st.info(analysis.summary or "No summary provided.")

    scores = analysis.metrics.scores()
    if scores:
        cols = st.columns(len(scores))
        for col, (label, value) in zip(cols, scores.items()):
            col.metric(label, f"{value:.0f}")

    current_tab, predicted_tab, fixes_tab, prevention_tab = st.tabs([
        f"Current Issues ({len(analysis.current_defects)})",
        f"Predicted Issues ({len(analysis.predicted_defects)})",
        "Priority Fixes",
        "Preventive Measures",
    ])

    def render_defects(defects, empty_message):
        if not defects:
            st.success(empty_message)
            return
        for defect in defects:
            with st.expander(f"{category_icon(defect.category)} {defect.title or defect.category}"):
                st.markdown(risk_badge(defect.severity), unsafe_allow_html=True)
                st.markdown(f"**Where:** {defect.location}")
                st.markdown(f"**What's wrong:** {defect.description}")
                st.markdown(f"**Why it matters:** {defect.impact}")
                st.markdown(f"**How to fix:** {defect.fix}")

    with current_tab:
        render_defects(analysis.current_defects, "No current issues found.")
    with predicted_tab:
        render_defects(analysis.predicted_defects, "No future risks predicted.")
    with fixes_tab:
        for i, fix in enumerate(analysis.priority_fixes, start=1):
            st.markdown(f"{i}. {fix}")
    with prevention_tab:
        for measure in analysis.preventive_measures:
            st.markdown(f"{risk_badge(measure.importance)} **{html.escape(measure.title)}**", unsafe_allow_html=True)
            st.write(measure.description)
