"""
Interface layer - host plugin hooks and command line interface.
"""
