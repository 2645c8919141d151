"""Reporting utilities for scarecrow."""

from .artifacts import max_abs_error, write_run_summary
from .metrics import LossLog, write_loss_table
from .plots import plot_run

__all__ = ["LossLog", "max_abs_error", "plot_run", "write_loss_table", "write_run_summary"]
