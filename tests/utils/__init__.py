"""Shared helpers for the relay test suite."""
