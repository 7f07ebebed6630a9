"""
schemagraph - Visualize and query GraphQL schema dependencies
"""

__version__ = "0.3.0"
