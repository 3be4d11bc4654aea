"""
Reporting utilities (plain text) for NaviSound.
"""

from navisound_app.reports.simple_text_report import build_sounding_summary_text

__all__ = [
    "build_sounding_summary_text",
]
