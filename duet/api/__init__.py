"""HTTP API for duet."""
