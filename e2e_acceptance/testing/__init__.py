"""Factories and helpers for the suite's own tests."""
