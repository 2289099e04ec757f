"""
Application layer.

Use cases orchestrate the domain: they load aggregates through repository
protocols, invoke entity behavior, call service protocols and persist the
result. Nothing here knows about HTTP, SQL or any concrete provider.
"""
