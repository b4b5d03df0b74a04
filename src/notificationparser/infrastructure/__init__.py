"""
Infrastructure layer - persistence, manifest parsing, package info, config and logging.
"""
