"""
Leitores de event logs.
"""

from bpmn_analytics.parsers.log_reader import LogReader

__all__ = ["LogReader"]
