"""Service Layer — query composition between routes and the Store Gateway.

Invariants:
    - Services never build HTTP responses; routes own envelopes and status codes
"""
