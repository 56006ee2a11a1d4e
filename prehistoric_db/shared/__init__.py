"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain and infrastructure. No business logic.
"""
