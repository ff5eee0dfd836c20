"""Core Application Layer: Orchestrates scripture lookups.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the BibleService and the Bible facade.
"""
