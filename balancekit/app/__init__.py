"""Application composition layer.

Controllers in this package wire views, view models, adapters, and use cases
into a runnable console workflow without placing business logic in views.
"""
