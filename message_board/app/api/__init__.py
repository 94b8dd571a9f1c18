"""
HTTP routes.

``router.py`` aggregates the endpoint routers found in ``endpoints``;
``main.create_app`` mounts the result under ``settings.api_prefix``.
"""
