"""
Application package for the message service.

``core`` holds configuration, logging, database helpers and the error
types; ``storage`` the interchangeable stores; ``services`` the
validation and initialization logic; ``api`` the HTTP routes and
``schemas`` their request and response bodies.
"""
