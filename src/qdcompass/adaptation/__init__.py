"""
Adaptive components that steer an evolutionary optimizer at runtime.
"""
