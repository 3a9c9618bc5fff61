"""HTTP value types — immutable request and response."""
