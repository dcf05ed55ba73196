"""Request, response and header types the router hands to middleware."""
