"""
Plotly figures for the dashboard.
"""

import plotly.express as px

ACCENT = '#ef8145'


def category_pie(category_totals: list[tuple[str, int]]):
    """
    Donut chart of spending by category with percent labels.
    Slices keep the order of ``category_totals`` (largest first).
    """
    fig = px.pie(
        names=[name for name, _ in category_totals],
        values=[total for _, total in category_totals],
        hole=0.4,
        title="Spending by Category"
    )
    fig.update_traces(textposition='inside', textinfo='percent+label', sort=False, direction='clockwise')
    return fig


def monthly_bar(monthly_totals: list[tuple[str, int]]):
    """Bar chart of monthly totals in calendar order."""
    months = [month for month, _ in monthly_totals]
    fig = px.bar(
        x=months,
        y=[total for _, total in monthly_totals],
        labels={'x': 'Month', 'y': 'Total'},
        title="Monthly Expenses",
        color_discrete_sequence=[ACCENT]
    )
    # "10/2025" would otherwise be read as a date axis
    fig.update_xaxes(type='category', categoryorder='array', categoryarray=months)
    return fig
