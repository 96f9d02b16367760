"""Plotting functions for ladder results. Based on plotly"""

from plotly import graph_objects as go
from plotly import io as pio
from polars import DataFrame, col


def set_plotly_template():
    plot_temp = pio.templates["plotly_dark"]
    plot_temp.layout.width = 400
    plot_temp.layout.height = 300
    plot_temp.layout.autosize = False
    pio.templates.default = plot_temp


def rmse_complexity_plot(results: DataFrame) -> go.Figure:
    """Train and test RMSE against number of predictors.

    Models that failed to fit are left out.
    """
    ok = results.filter(col("error").is_null()).sort("complexity")

    fig = go.Figure()
    for split in ["train", "test"]:
        fig.add_trace(
            go.Scatter(
                x=ok["complexity"].to_list(),
                y=ok[f"{split}_rmse"].to_list(),
                mode="lines+markers",
                name=split,
                text=[f"model {m}" for m in ok["model"]],
            )
        )

    fig.update_layout(
        xaxis_title="complexity (predictors)",
        yaxis_title="RMSE",
    )
    return fig
