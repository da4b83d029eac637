"""Packaged seed data."""
