"""Fuzzy matching and scoring, accent folding, ANSI colour parsing, chunked item storage, a query cache and a file-backed history."""

__version__ = "0.46.0"