"""Shared cross-cutting helpers: actor context, telemetry (logging), utils."""
