"""
API package containing the HTTP routes.

``router`` aggregates the endpoint modules under ``endpoints`` and is
mounted by ``main.create_app`` under the ``/api`` prefix.
"""
