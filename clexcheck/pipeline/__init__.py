"""Analyzer pipeline: options, report carrier and entrypoints."""

from clexcheck.pipeline.entrypoints import analyze, analyze_file, analyze_files
from clexcheck.pipeline.options import AnalyzerOptions
from clexcheck.pipeline.result import AnalysisReport

__all__ = [
    "AnalysisReport",
    "AnalyzerOptions",
    "analyze",
    "analyze_file",
    "analyze_files",
]
