"""Flet application shell for Vetria."""
