"""Single-message persistence service and its HTTP API."""
