"""
HR records service.

Employee (user) records, each owning an ordered list of personal documents,
stored through a generic keyed document store and exposed over a FastAPI
HTTP API.
"""
