"""
Redis persistence helpers for staged sessions and workspaces.
"""
