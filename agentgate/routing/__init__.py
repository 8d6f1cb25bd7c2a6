"""
Request flows: fragment staging, completion aggregation and workspaces.
"""
