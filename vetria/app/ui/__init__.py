"""Flet UI building blocks: theme constants and layouts."""
