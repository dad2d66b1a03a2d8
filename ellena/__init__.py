"""Ellena: task and meeting context retrieval."""
