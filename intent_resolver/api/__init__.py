"""HTTP surface of the intent resolver."""
