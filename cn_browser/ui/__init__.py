"""
Dash front end: layout builders, callback registration and app factory.
"""
