"""HTTP API for the Google News resolver."""
