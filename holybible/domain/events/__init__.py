"""Domain Event definitions.

Represents significant occurrences in the lifecycle of an API request
that log sinks or other observers might react to.
"""
