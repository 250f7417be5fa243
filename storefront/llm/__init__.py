"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Ask the model to rank catalog candidates for a shopper's profile.
- Write marketing descriptions for new products.
- Graceful fallback when the LLM is unavailable or returns invalid output.
"""
