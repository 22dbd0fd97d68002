"""
Administrator dashboard operations: counts, account moderation and
removal of any recipe or AI recipe.
"""
