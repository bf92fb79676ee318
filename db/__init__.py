"""
db/ - Database Layer
====================
Handles the PostgreSQL connection, schema initialization and the error type
raised for any failed statement.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
