"""
Core functionality for the YouTube transcript summarizer.

This package contains modules for fetching caption transcripts, loading the
local model, and summarizing transcripts with a tiered fallback chain.
"""
