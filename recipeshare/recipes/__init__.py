"""
Recipes, reviews and saved recipes.

Responsibilities:
- Create, list, update and delete user recipes (owner or admin only).
- Keep one review per account on each recipe and the cached average rating
  in step with the review list.
- Track each account's saved recipes.
- Persist AI-generated recipes for the account that generated them.
"""
