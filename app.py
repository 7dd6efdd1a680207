import logging

import pandas as pd
import streamlit as st
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from paper_check.core.checker import PlagiarismChecker
from paper_check.core.config import COSINE_UNITS, STRATEGIES, CheckerConfig
from paper_check.core.scoring import Verdict
from paper_check.core.simhash import format_fingerprint
from paper_check.core.text_processing import count_frequencies, shared_tokens, tokenize
from paper_check.core.validation import ValidationError
from paper_check.utils.text_reader import decode_bytes

from paper_check.core.logging_config import setup_logging

CONFIG = CheckerConfig.from_env()

setup_logging(
    log_level=CONFIG.log_level,
    log_dir=CONFIG.log_dir,
    structured_logging=CONFIG.structured_logging,
    enable_console=True,
)

logger = logging.getLogger(__name__)

VERDICT_STYLES = {
    Verdict.HIGH: "error",
    Verdict.MODERATE: "warning",
    Verdict.SLIGHT: "info",
    Verdict.LOW: "success",
}


def initialize_session_state():
    """Initialize all session state variables."""
    if "comparison" not in st.session_state:
        st.session_state.comparison = None
    if "shared_tokens" not in st.session_state:
        st.session_state.shared_tokens = []


def initialize_app():
    """Setup the Streamlit page."""
    st.set_page_config(
        page_title="Paper Check - Document Similarity",
        page_icon="📄",
        layout="wide",
    )
    st.title("📄 Paper Check")
    st.caption("SimHash fingerprints and Hamming distance for plagiarism screening")
    initialize_session_state()


def get_settings():
    """Sidebar controls."""
    st.sidebar.markdown("### 🎛️ Analysis Settings")
    strategy = st.sidebar.selectbox(
        "Scoring strategy",
        STRATEGIES,
        index=STRATEGIES.index(CONFIG.strategy),
        help="simhash: 64-bit fingerprints compared by Hamming distance. "
             "cosine: cosine similarity of character or token frequencies.",
    )
    cosine_unit = st.sidebar.radio(
        "Cosine counts",
        COSINE_UNITS,
        index=COSINE_UNITS.index(CONFIG.cosine_unit),
        horizontal=True,
        disabled=strategy != "cosine",
        help="char: every CJK character, letter and digit. token: whole tokens.",
    )
    top_n = st.sidebar.slider("Shared tokens to list", min_value=5, max_value=100, value=20, step=5)

    with st.sidebar.expander("ℹ️ How to read the verdict", expanded=False):
        for verdict in Verdict:
            st.markdown(f"- **≥ {verdict.lower_bound:.0%}**: {verdict.label}")

    return strategy, cosine_unit, top_n


def read_document(column, title, key):
    """Upload or paste one document; returns its text or None."""
    with column:
        st.markdown(f"#### {title}")
        uploaded = st.file_uploader(f"Upload {title.lower()}", type=["txt", "md"], key=f"{key}_file")
        if uploaded is not None:
            try:
                text, encoding = decode_bytes(uploaded.getvalue())
            except ValidationError as e:
                st.error(f"❌ {e.message}")
                return None
            st.caption(f"Decoded as {encoding}, {len(text)} characters")
            return text
        return st.text_area(f"…or paste {title.lower()}", height=220, key=f"{key}_text")


def run_comparison(original, suspect, strategy, cosine_unit, top_n):
    checker = PlagiarismChecker(strategy=strategy, cosine_unit=cosine_unit)
    try:
        result = checker.compare(original, suspect)
    except ValidationError as e:
        logger.error(f"Comparison failed: {e.message}")
        st.error(f"❌ {e.message}")
        return

    st.session_state.comparison = result
    st.session_state.shared_tokens = shared_tokens(
        count_frequencies(tokenize(original)),
        count_frequencies(tokenize(suspect)),
        limit=top_n,
    )


def display_results(result, common):
    st.markdown("## 📊 Result")

    col1, col2, col3 = st.columns(3)
    col1.metric("Similarity", f"{result.percentage:.2f}%")
    if result.distance is not None:
        col2.metric("Hamming distance", f"{result.distance} / {result.bits}")
    else:
        col2.metric("Strategy", result.strategy)
    col3.metric("Tokens (original / suspect)", f"{result.token_count_original} / {result.token_count_suspect}")

    getattr(st, VERDICT_STYLES[result.verdict])(result.verdict.label)

    if result.fingerprint_original is not None:
        with st.expander("🔑 Fingerprints", expanded=False):
            st.code(
                f"original  {format_fingerprint(result.fingerprint_original, result.bits)}  "
                f"{format_fingerprint(result.fingerprint_original, result.bits, binary=True)}\n"
                f"suspect   {format_fingerprint(result.fingerprint_suspect, result.bits)}  "
                f"{format_fingerprint(result.fingerprint_suspect, result.bits, binary=True)}"
            )

    st.markdown("### 🔍 Most frequent shared tokens")
    if common:
        frame = pd.DataFrame(common, columns=["Token", "Original", "Suspect"])
        st.dataframe(frame, use_container_width=True, hide_index=True)
    else:
        st.info("The documents have no tokens in common.")


def main():
    """Main application function."""
    initialize_app()
    strategy, cosine_unit, top_n = get_settings()

    left, right = st.columns(2)
    original = read_document(left, "Original document", "original")
    suspect = read_document(right, "Suspect document", "suspect")

    if st.button("🚀 Compare", type="primary"):
        if not (original or "").strip() or not (suspect or "").strip():
            st.warning("⚠️ One of the documents is empty, the result may be inaccurate.")
        run_comparison(original, suspect, strategy, cosine_unit, top_n)

    if st.session_state.comparison is not None:
        display_results(st.session_state.comparison, st.session_state.shared_tokens)


if __name__ == "__main__":
    main()
