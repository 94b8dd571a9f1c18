"""
Service layer abstraction.

Services hold the logic between HTTP handlers and storage, so handlers
stay free of validation and initialization details.
"""
