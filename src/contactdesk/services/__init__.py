"""Service layer.

Owns transactions: each write commits or rolls back, and database
constraint failures are translated into domain errors.
"""
