"""HTTP and WebSocket surface for Arcade Snake sessions."""
