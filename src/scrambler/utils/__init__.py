"""Shared helpers: exceptions, span utilities and logging."""
