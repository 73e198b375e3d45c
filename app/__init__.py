"""HTTP interface for the statement converter."""
