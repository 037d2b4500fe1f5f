"""Person of the Week voting app.

This package is organized by feature modules (users, sessions, votes,
results, analytics, access) with a thin Flask controller layer on top of
service/repository layers.
"""
