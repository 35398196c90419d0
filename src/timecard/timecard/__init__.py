"""Timecard package.

Feature modules: ``attendance`` (calendar grid, record merge, month view and
day session), ``remote`` (HTTP transport, retry layer, API client) and
``store`` (the Flask record store backed by MySQL).
"""
