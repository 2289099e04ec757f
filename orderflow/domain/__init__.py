"""
Domain layer.

Holds the order desk's business state and rules. Nothing in here imports
from the application or infrastructure layers, or from any framework.

This layer contains:
- Entities: Objects with identity whose methods guard their own state
- Value Objects: Immutable objects defined by attributes
- Aggregate Roots: Consistency boundaries that record domain events
"""
