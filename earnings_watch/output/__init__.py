"""Report rendering for matched articles and run statistics."""

from .report_formatter import clean_title, format_article, format_date_line, format_report
from .pipeline_reporter import PipelineReport

__all__ = ["clean_title", "format_article", "format_date_line", "format_report", "PipelineReport"]
