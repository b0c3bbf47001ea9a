"""Observability — structured logging setup."""
