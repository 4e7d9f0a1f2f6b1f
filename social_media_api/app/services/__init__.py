"""
Service layer.

Each service encapsulates the business rules for one domain and owns
the SQL for its table.  API handlers call services and translate the
errors from ``core.errors`` into HTTP responses.
"""
