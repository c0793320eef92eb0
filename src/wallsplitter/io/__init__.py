"""Plan and report input/output."""

from .parser import load_plan, parse_plan, save_plan
from .report import report_frame, write_report

__all__ = ["load_plan", "parse_plan", "save_plan", "report_frame", "write_report"]
