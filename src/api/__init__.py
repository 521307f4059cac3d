"""HTTP transport for the contacts service."""
