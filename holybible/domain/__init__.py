"""Domain Layer: models, exceptions, events and interfaces (ports).

Has no dependencies on the infrastructure layer.
"""
