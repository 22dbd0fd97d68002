"""
RecipeShare - recipe-sharing REST API.

Users register, post recipes, review and save them, generate recipes from
a list of ingredients with an LLM, and file complaints. Administrators
moderate accounts, recipes and complaints.
"""

__version__ = "1.0.0"
