"""HTTP interface for the variant service."""
