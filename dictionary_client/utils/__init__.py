"""Small helpers shared across the client state layer."""
