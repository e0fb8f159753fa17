"""
Services layer: integrations with things outside the in-memory snapshot
(the remote curated filter-list API).
"""
