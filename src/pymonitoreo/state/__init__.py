"""State layer.

This package holds the only shared mutable state of the dashboard: the
per-entity cache and the view/filter selection. Both are plain objects
threaded by reference through the loader, controller and renderer.
"""
