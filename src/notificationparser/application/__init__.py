"""
Application layer - lifecycle synchronization and wiring.
"""
