"""
Chat-Log Expense Tracker - Streamlit Frontend
Dashboard over expenses noted in an exported chat log
"""

import streamlit as st
import sys
import logging
from pathlib import Path
from datetime import datetime
import tempfile

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))
sys.path.insert(0, str(Path(__file__).parent))

# Import backend modules
from config import config
from logging_config import setup_logging
from extractors.date_rules import YearPolicy
from aggregators.expense_aggregator import resolve_category
from main import ExpenseLogPipeline, ExpenseReport, TransactionFilter
from output.writer import generate_pdf_report
from charts import category_pie, monthly_bar

setup_logging(log_file=config.LOG_FILE)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #ef8145;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #808183;
        margin-bottom: 2rem;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def parse_chat_log(text: str, fallback_year: int, year_policy: str):
    """Parse once per (text, year settings); reruns reuse the result."""
    pipeline = ExpenseLogPipeline(fallback_year=fallback_year, year_policy=year_policy)
    return pipeline.process_text(text)


def main():
    """Main application function."""

    st.markdown('<div class="main-header">💸 Expense Tracker</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Expenses noted in a chat log, by category and by month</div>', unsafe_allow_html=True)

    # Sidebar - Input Configuration
    with st.sidebar:
        st.header("📋 Configuration")

        st.subheader("1. Chat Log")
        uploaded_file = st.file_uploader(
            "Upload exported chat (.txt)",
            type=['txt'],
            help="Lines like '[27/10/2025, 9:39 pm] Name: F-20'"
        )
        pasted_text = st.text_area(
            "...or paste it here",
            height=160,
            disabled=uploaded_file is not None
        )

        st.divider()

        st.subheader("2. Dates Without a Year")
        year_policy = st.radio(
            "Year policy",
            options=[p.value for p in YearPolicy],
            index=[p.value for p in YearPolicy].index(YearPolicy.from_value(config.YEAR_POLICY).value),
            format_func=lambda v: "Fixed year" if v == YearPolicy.FIXED.value else "Year after latest dated entry",
        )
        fallback_year = st.number_input(
            "Fallback year",
            min_value=1900,
            max_value=2999,
            value=config.FALLBACK_YEAR,
            step=1
        )

        st.divider()

        st.subheader("3. Filters")
        category_keyword = st.text_input("Category contains", value="")

    if uploaded_file is not None:
        try:
            text = uploaded_file.getvalue().decode("utf-8-sig")
        except UnicodeDecodeError:
            st.error("❌ The uploaded file is not valid UTF-8 text")
            return
    else:
        text = pasted_text

    if not text or not text.strip():
        st.info("👈 Upload or paste a chat log from the sidebar to get started")
        return

    try:
        report = parse_chat_log(text, int(fallback_year), year_policy)
    except Exception as e:
        logger.error(f"Error parsing chat log: {e}", exc_info=True)
        st.error(f"❌ Error parsing chat log: {str(e)}")
        return

    display_results(report, category_keyword)


def display_results(report, category_keyword: str):
    """Display metrics, charts, the transaction table and the PDF download."""

    if category_keyword:
        transactions = TransactionFilter.filter_by_category(
            report.transactions, category_keyword, report.category_names
        )
        report = ExpenseReport.from_transactions(transactions, report.category_names)

    summary = report.summary

    st.subheader("📊 Summary Statistics")
    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Total Expenses", f"{summary.total:,}")

    with col2:
        st.metric("Total Transactions", summary.count)

    with col3:
        st.metric("Average per Transaction", summary.average_display)

    if not report.transactions:
        st.warning("⚠️ No expense lines found. Expected lines like '[27/10/2025, 9:39 pm] Name: F-20'.")
        return

    st.divider()

    col1, col2 = st.columns(2)

    with col1:
        st.plotly_chart(category_pie(report.category_totals), use_container_width=True)

    with col2:
        st.subheader("Category Breakdown")
        for name, total in report.category_totals:
            share = total / summary.total * 100 if summary.total else 0
            st.markdown(f"- **{name}**: {total:,} ({share:.0f}%)")

    st.plotly_chart(monthly_bar(report.monthly_totals), use_container_width=True)

    st.subheader("Recent Transactions")
    st.dataframe(
        [
            {
                "Date": txn.date,
                "Category": resolve_category(txn.category, report.category_names),
                "Amount": txn.amount,
            }
            for txn in reversed(report.transactions)
        ],
        use_container_width=True,
        hide_index=True
    )

    st.divider()

    st.subheader("📥 Download Report")
    if st.button("📄 Generate PDF Report", type="primary"):
        with tempfile.TemporaryDirectory() as tmp_dir:
            output_path = Path(tmp_dir) / "expense_report.pdf"
            try:
                generate_pdf_report(
                    output_path=str(output_path),
                    transactions=report.transactions,
                    category_totals=report.category_totals,
                    monthly_totals=report.monthly_totals,
                    summary=report.summary,
                    category_names=report.category_names
                )
                pdf_data = output_path.read_bytes()
            except Exception as e:
                logger.error(f"PDF generation failed: {e}", exc_info=True)
                st.error(f"❌ Could not generate report: {str(e)}")
                return

        st.download_button(
            label="Download PDF",
            data=pdf_data,
            file_name=f"expense_report_{datetime.now().strftime('%Y%m%d')}.pdf",
            mime="application/pdf"
        )


if __name__ == "__main__":
    main()
