"""
postfeed - daily AI + UX post generator with a novelty guardrail.
"""

__version__ = "1.0.0"
