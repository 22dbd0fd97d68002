"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the recipe-generation prompt from the ingredients a user has.
- Call Groq in JSON mode and validate the reply against the recipe schema.
- Surface unusable replies as server errors that carry the raw text.
"""
