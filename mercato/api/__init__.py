"""HTTP API - routers, schemas, middleware."""
