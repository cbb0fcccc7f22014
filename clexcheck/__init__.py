"""Lexical analyzer for a C-like subset that reports common novice mistakes."""

from clexcheck.diagnostics import ErrorKind, Flag
from clexcheck.pipeline import AnalysisReport, AnalyzerOptions, analyze, analyze_file

__all__ = [
    "AnalysisReport",
    "AnalyzerOptions",
    "ErrorKind",
    "Flag",
    "analyze",
    "analyze_file",
]
