"""Telemetry module for logging, metrics, alerts, and reporting."""

from arbscan.telemetry.alerts import CollectingAlertSink, LogAlertSink
from arbscan.telemetry.logger import LogPipeline, setup_logging
from arbscan.telemetry.metrics import MetricsCollector
from arbscan.telemetry.reporter import CLIReporter


__all__ = [
    "CLIReporter",
    "CollectingAlertSink",
    "LogAlertSink",
    "LogPipeline",
    "MetricsCollector",
    "setup_logging",
]
