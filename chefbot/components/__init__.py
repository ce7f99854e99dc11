"""Chat command components. Each module exposes setup(runtime)."""
