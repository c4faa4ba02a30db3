"""State/store layer.

This package is the single source of truth for how fetch results, clock
ticks and user actions are reconciled into the dashboard view model.
"""
