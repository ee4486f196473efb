"""
Bridge tools. Each tool wraps one remote capability.
"""

from .analyze import AnalyzeCodeTool

__all__ = ["AnalyzeCodeTool"]
