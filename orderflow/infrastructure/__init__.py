"""
Infrastructure layer.

Concrete adapters for the application's protocols (SQLAlchemy repositories,
payment, shipping and notification services) and the entry points that
drive use cases: HTTP routers, the CLI and the shipment worker.
"""
