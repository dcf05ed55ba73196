"""Routing: pattern matching, the middleware factory and the router.

Middleware are registered in order and tried in that order; the first
one to produce a response wins.
"""
