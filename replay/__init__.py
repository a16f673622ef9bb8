"""Offline replay of recorded GPS tracks through the pace engine."""
