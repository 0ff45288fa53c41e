"""
Dashboard Data Layer
====================

  1. load_history()          - reads manifests, folders, rates from the store (cached)
  2. statement_for_folders() - builds the statement for the sidebar selection
  3. tier_chart()            - plotly figure of slab amounts per manifest

Convention: Polars for all tables. Charts receive plain lists.
"""

import os
from pathlib import Path

import plotly.graph_objects as go
import polars as pl
import streamlit as st

from shared import storage
from manifest_billing.calculate_charges import statement_for_folders
from manifest_billing.data import DEFAULT_RATES
from manifest_billing.export import tier_frame
from manifest_billing.models import ConsolidatedStatement


STORE_DIR = Path(os.environ.get("MANIFEST_BILLING_STORE", storage.DEFAULT_STORE_DIR))

TIER_COLORS = {
    "S1": "#4C78A8",
    "S2": "#F58518",
    "S3": "#54A24B",
    "Doc": "#B279A2",
}


# =============================================================================
# LOADING (cached)
# =============================================================================

def _store_mtime() -> float:
    path = STORE_DIR / f"{storage.MANIFESTS_KEY}.json"
    return path.stat().st_mtime if path.exists() else 0.0


@st.cache_data(ttl=None)
def load_history(store_dir: str, file_mtime: float = 0):
    """Manifests, folders and global rates. Re-read when manifests.json changes."""
    storage.configure_store(store_dir)
    rates = storage.load_rates(DEFAULT_RATES)
    return storage.load_manifests(rates), storage.load_folders(), rates


def init_page():
    """Load the store, or stop the page with an error."""
    try:
        return load_history(str(STORE_DIR), _store_mtime())
    except RuntimeError as e:
        st.error(f"Could not read store at {STORE_DIR}\n\n{e}")
        st.stop()


# =============================================================================
# CHARTS
# =============================================================================

def tier_chart(statement: ConsolidatedStatement) -> go.Figure:
    """Stacked bar of S1/S2/S3/document amounts per manifest."""
    df = tier_frame(statement)
    fig = go.Figure()

    for tier, color in TIER_COLORS.items():
        part = df.filter(pl.col("tier") == tier)
        fig.add_trace(go.Bar(
            x=part["manifest_number"].to_list(),
            y=part["amount"].to_list(),
            name=tier,
            marker_color=color,
        ))

    fig.update_layout(
        barmode="stack",
        title=statement.title,
        xaxis_title="Manifest",
        yaxis_title="Amount",
        legend_title="Slab",
        height=420,
    )
    return fig


__all__ = [
    "STORE_DIR",
    "load_history",
    "init_page",
    "statement_for_folders",
    "tier_chart",
]
