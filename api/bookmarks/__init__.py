"""
Bookmarks feature: routes, validation/serialization, and SQL.
"""
