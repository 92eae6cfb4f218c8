"""
MennoMap - Interactive atlas of Mennonite colonies and migrations in Latin America.
"""

__version__ = "0.1.0"
