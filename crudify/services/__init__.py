"""Services: default handlers, query construction, content encoding."""
