"""
Asset host for uploaded images (recipe photos, avatars).
"""
