"""Mail protocol clients and raw message helpers."""
