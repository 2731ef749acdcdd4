"""
Search tools and utilities for fastfind.

This module contains the traversal filter, the filesystem walker, and the
filename and content matchers used by the search executors.
"""
