"""Library feature: persisted track and playlist metadata."""
