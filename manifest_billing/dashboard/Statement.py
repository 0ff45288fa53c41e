"""
Consolidated Statement Dashboard
================================

Read-only view of consolidated statements from the JSON store.

Prerequisites:
    python -m manifest_billing.scripts.import_manifests --store ~/.manifest_billing --zip March.zip

Run with:
    MANIFEST_BILLING_STORE=~/.manifest_billing streamlit run manifest_billing/dashboard/Statement.py
"""

import streamlit as st

from manifest_billing.dashboard.data import init_page, statement_for_folders, tier_chart
from manifest_billing.export import page_subtotals, statement_frame
from manifest_billing.formatting import format_rupees
from manifest_billing.pipeline import heavy_detail_warnings

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="Consolidated Statement",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded",
)

history, folders, rates = init_page()

# =============================================================================
# SIDEBAR
# =============================================================================

st.sidebar.header("Folders")
if not folders:
    st.info("No folders in the store yet. Import an archive first.")
    st.stop()

names = {f.name: f.id for f in folders}
selected = st.sidebar.multiselect("Consolidate", list(names), default=list(names)[:1])

st.sidebar.markdown("---")
st.sidebar.caption(
    f"Default rates: S1 {rates.slab1_rate} / S2 {rates.slab2_rate} / "
    f"S3 {rates.slab3_rate} per kg, document {rates.document_rate}"
)

if not selected:
    st.warning("Select at least one folder.")
    st.stop()

statement = statement_for_folders(history, folders, [names[n] for n in selected])

# =============================================================================
# KPIs
# =============================================================================

st.title(statement.title)

totals = statement.totals
col1, col2, col3, col4 = st.columns(4)
col1.metric("Manifests", len(statement.lines))
col2.metric("Parcels (p / P)", f"{totals.light_count} / {totals.heavy_count}")
col3.metric("Total weight", f"{totals.total_weight:,.0f} kg")
col4.metric("Grand total", format_rupees(totals.grand_total))

for number in heavy_detail_warnings(statement):
    st.warning(f"{number}: some heavy parcel weights could not be read")

# =============================================================================
# STATEMENT TABLE
# =============================================================================

st.dataframe(statement_frame(statement), use_container_width=True, hide_index=True)

subtotals = page_subtotals(statement)
if len(subtotals) > 1:
    st.caption(" | ".join(
        f"Page {i}: {format_rupees(s)}" for i, s in enumerate(subtotals, start=1)
    ))

st.plotly_chart(tier_chart(statement), use_container_width=True)
