"""Summary: Infrastructure adapters (logging, catalog HTTP clients, object storage).
Why: Keep network and I/O concerns out of the reconciliation domain."""
