"""
Stepwise - markdown-driven "learn by doing" tutorial runtime.

Parses chapter documents (front matter, steps, quizzes) into a cached
catalog and tracks per-chapter learning progress for the dashboard.
"""

__version__ = "0.1.0"
