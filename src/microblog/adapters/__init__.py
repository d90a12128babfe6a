"""Adapters wrapping third-party libraries used by microblog."""
