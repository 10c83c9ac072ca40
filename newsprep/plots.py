# newsprep/plots.py
"""Figure output shared by the EDA and classifier charts.

Only pyplot is imported here. The scripts that draw pick the Agg backend
themselves before anything imports pyplot.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt

log = logging.getLogger(__name__)


def save_figure(path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout(); plt.savefig(path); plt.close()
    log.info("Saved figure %s", path)
    return path
