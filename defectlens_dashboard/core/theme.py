import streamlit as st

THEME_CSS = """
<style>
div[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #EEF2FF 0%, #F8FAFC 100%);
}

.block-container {
    padding-top: 2rem;
}

.page-header h1 {
    color: #0F172A;
    margin-bottom: 0;
}

.page-header p {
    color: #64748b;
}

.metric-card {
    background: rgba(255,255,255,0.92);
    border-radius: 18px;
    padding: 18px;
    border: 1px solid rgba(0,0,0,0.08);
    box-shadow: 0 8px 30px rgba(15,23,42,0.1);
    text-align: center;
}

.metric-value {
    font-size: 40px;
    font-weight: 700;
}

.metric-label {
    color: #64748b;
    font-size: 14px;
}

.stButton>button {
    background: linear-gradient(90deg, #4F46E5, #4338CA);
    color: white;
    border-radius: 12px;
    font-weight: 600;
    border: none;
}
</style>
"""


def load_theme():
    st.markdown(THEME_CSS, unsafe_allow_html=True)


def page_header(title: str, subtitle: str):
    st.markdown(f"""
    <div class="page-header">
        <h1>{title}</h1>
        <p>{subtitle}</p>
    </div>
    """, unsafe_allow_html=True)


def metric_card(value, label, color=None):
    style = f'color: {color};' if color else 'color: #1e40af;'
    return f"""
    <div class="metric-card">
        <div class="metric-value" style="{style}">{value}</div>
        <div class="metric-label">{label}</div>
    </div>
    """
