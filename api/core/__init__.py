"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses: DB wiring,
errors and response envelopes, request validation, name resolution and
logging. Resource-specific SQL and business logic stay in the resource
package (e.g. `entities/`).
"""
