"""HTTP API for cachechurn."""
