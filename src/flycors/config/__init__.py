"""FlyCors configuration properties."""
