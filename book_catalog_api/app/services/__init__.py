"""
Service layer.

Services hold the business rules and talk to storage only through
the store's ``load``/``save`` primitives, so the flat-file backend
can be swapped without touching the rules.
"""
