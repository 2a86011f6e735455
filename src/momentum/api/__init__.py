"""HTTP API for the Momentum application."""
