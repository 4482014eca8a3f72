"""Routing heuristics and the per-request router."""
