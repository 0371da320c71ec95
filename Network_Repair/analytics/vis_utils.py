"""
Visualization utilities for the INP Repair Dashboard.
"""
import plotly.graph_objects as go
import pandas as pd
import numpy as np


def _empty_figure(title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text="No links to display", showarrow=False)
    fig.update_layout(title=title, height=350)
    return fig


def create_roughness_chart(links_df: pd.DataFrame, default_roughness: float = None) -> go.Figure:
    """Bar chart of roughness per link, with the fill-in default as a reference line."""
    title = "Roughness by Link"
    if links_df.empty:
        return _empty_figure(title)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=links_df['id'].astype(str),
        y=links_df['roughness'],
        name='Roughness',
        marker_color='#636EFA'
    ))

    if default_roughness is not None:
        fig.add_hline(
            y=float(default_roughness),
            line=dict(color='#999999', dash='dash'),
            annotation_text=f"Default C={default_roughness:g}"
        )

    fig.update_layout(
        title=title,
        xaxis_title="Link", yaxis_title="Roughness (C-Factor)",
        height=350,
        # Transparent background to support Light/Dark Streamlit themes
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)'
    )
    return fig


def create_flow_chart(links_df: pd.DataFrame) -> go.Figure:
    """Flow per link; reversed flows (negative) in red."""
    title = "Flow by Link"
    if links_df.empty:
        return _empty_figure(title)

    colors = np.where(links_df['flow_lps'] < 0, '#EF553B', '#00CC96')

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=links_df['id'].astype(str),
        y=links_df['flow_lps'],
        marker_color=colors,
        text=[f"{n1} → {n2}" for n1, n2 in zip(links_df['node1'], links_df['node2'])],
        hovertemplate="%{x}<br>%{text}<br>Q: %{y:.2f} L/s<extra></extra>",
        name='Flow'
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Link", yaxis_title="Flow (L/s)",
        height=350,
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)'
    )
    return fig
