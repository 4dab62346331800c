"""
myjiratickets - Keep a local Jira ticket list in sync.

Fetches tickets from Jira, reconciles them with a local ticket store and
publishes the store as an HTML snapshot (and can read tickets back from it).
"""

__version__ = "1.0.0"
