"""Breeding compatibility rules."""
