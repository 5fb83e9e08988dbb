"""Print the per-age-group likes summary behind the box plot.

Run from the repo root:
    python examples/summarize_likes.py
"""

from socialcharts.utils.logging import configure_logging
from socialcharts.chart_app.schema import SOCIAL_MEDIA_CSV, load_csv_for_file
from socialcharts.chart_widget.algorithms.group_summary import summarize_groups
from socialcharts.chart_widget.dataframe_processor import DataFrameProcessor

configure_logging(level="INFO")

proc = DataFrameProcessor(load_csv_for_file(SOCIAL_MEDIA_CSV), required_columns=["AgeGroup", "Likes"])
result = summarize_groups(proc.observations("AgeGroup", "Likes"))

print("--- Likes by AgeGroup (five-number summary + IQR) ---")
print(result.to_frame().to_string())
