"""HTTP layer: route table, guards and session boundary."""
