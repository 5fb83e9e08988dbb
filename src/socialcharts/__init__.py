"""
socialcharts: box plot, grouped bar chart and line chart of social media likes.

This package provides:
- summarize_groups: five-number summary + IQR per group (box plot data)
- FigureGenerator: Plotly figure dicts from computed data and a ChartState
- A NiceGUI app showing the three charts (socialcharts.chart_app)

For logging configuration in standalone scripts:
    ```python
    from socialcharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from socialcharts.utils.logging import configure_logging, get_logger
from socialcharts.chart_widget.algorithms.group_summary import (
    GroupedResult,
    GroupSummary,
    InvalidInputError,
    Observation,
    summarize_groups,
)

# NullHandler until an application calls configure_logging().
_logger = logging.getLogger("socialcharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "GroupSummary",
    "GroupedResult",
    "InvalidInputError",
    "Observation",
    "configure_logging",
    "get_logger",
    "summarize_groups",
]

__version__ = "0.1.0"
