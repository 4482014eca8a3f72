"""Completion provider adapters and retrieval-augmented answering."""
