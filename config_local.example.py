# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. This file should contain only safe overrides.
"""

# Example: preview the small widget layout
# WIDGET_FAMILY = "small"

# Example: read a different app group
# SUITE_NAME = "group.com.example.tasks"
