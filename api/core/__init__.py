"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that multiple features use
(settings, logging, cookie policy). Keep endpoint-specific code in the
corresponding feature package (e.g. `status/`).
"""
