"""
Run result reporting.
"""

from conductor.reporting.sink import JsonReportSink, MemoryReportSink, ReportSink, ensure_artifact_dirs

__all__ = [
	'JsonReportSink',
	'MemoryReportSink',
	'ReportSink',
	'ensure_artifact_dirs',
]
