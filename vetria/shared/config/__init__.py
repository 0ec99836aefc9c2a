"""
Shared Config Module
====================

Holds settings/: YAML configuration files (defaults, project, user).
"""
