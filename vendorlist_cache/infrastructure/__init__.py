"""
Infrastructure Module

Concrete storage backends for the cache tiers.
"""
