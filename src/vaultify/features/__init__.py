"""Feature packages: metadata reconciliation, library store and ingest."""
