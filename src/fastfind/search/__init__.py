"""
Search execution for fastfind.

This package contains the score aggregation, cancellation, progress
reporting, and the sequential and parallel search executors.
"""
