"""
HTTP layer.

``router.py`` aggregates the per-domain routers found in ``endpoints``;
``deps.py`` builds services for each request from the store handle on
``app.state``.
"""
