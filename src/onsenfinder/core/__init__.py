"""Core — document codec, query builder, and resource operations."""
