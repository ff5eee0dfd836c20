"""HTTP Transport Implementations.

Concrete adapters for the domain Transport interface.
Bounded Context: Outbound HTTP
"""
