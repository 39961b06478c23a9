"""Cross-cutting infrastructure: database, errors, logging and tenancy."""
