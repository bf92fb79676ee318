"""
models/ - Domain Models
=======================
Plain dataclasses for the entities stored in the database.
"""
