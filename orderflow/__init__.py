"""orderflow: order desk backend organised as entities, use cases, services and repositories."""
