"""A tiny in-memory SDK shaped like the ones reflex_client introspects."""
