"""Application layer: DTOs, ports, access policy, metrics and use cases."""
