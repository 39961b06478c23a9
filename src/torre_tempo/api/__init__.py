"""HTTP API: health endpoints and tenant-scoped module routers."""
