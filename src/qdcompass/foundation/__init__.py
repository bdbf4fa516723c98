"""
Shared foundations: exceptions and logging helpers.
"""
