"""Functions for plotting read tracking tables.

Copyright © 2023 Pixelgen Technologies AB.
"""

import warnings
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import seaborn as sns

from readtrack.stages import STAGES
from readtrack.tracking.table import TrackingTable, long_form_dataframe

sns.set_style("whitegrid")


def plot_read_tracking(
    table: TrackingTable,
    log_scale: bool = False,
    ax: Optional[plt.Axes] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """Create a line plot of the reads surviving each stage, one line per sample.

    :param table: the read tracking table
    :param log_scale: use a logarithmic y axis
    :param ax: the axes to draw on, a new figure is created if not given
    :return: the figure and axes with the plot
    :rtype: Tuple[plt.Figure, plt.Axes]
    """
    data = long_form_dataframe(table)
    # plot on stage positions so the fixed stage order is kept
    data["position"] = data["stage"].cat.codes

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.get_figure()

    with warnings.catch_warnings():
        warnings.simplefilter(action="ignore", category=FutureWarning)
        sns.lineplot(
            data=data,
            x="position",
            y="count",
            hue="sample_id",
            marker="o",
            ax=ax,
        )

    ax.set_xticks(range(len(STAGES)))
    ax.set_xticklabels([stage.value for stage in STAGES])
    ax.set_xlabel("Stage")
    ax.set_ylabel("Reads")
    if log_scale:
        ax.set_yscale("log")
    ax.set_title("Reads surviving each pipeline stage")
    ax.legend(title="Sample", loc="best")

    return fig, ax
