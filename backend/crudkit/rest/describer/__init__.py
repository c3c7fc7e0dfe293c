"""OpenAPI describer — query-parameter documentation for REST actions."""
