"""
HTTP API for postfeed.
"""
