"""Host editor adapters."""
