"""Business logic services.

Service functions take the document store as their first argument and are
called by route handlers. They never raise for missing rows; they return
None or False and let the caller decide what that means.
"""
