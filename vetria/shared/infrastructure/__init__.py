"""Technical adapters."""
