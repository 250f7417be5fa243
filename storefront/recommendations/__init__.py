"""
Product recommendation engine.

Responsibilities:
- Rank "related products" around an anchor product with a deterministic
  popularity heuristic.
- Blend in an optional personalised ranking from the LLM layer.
- Score smart-assistant quiz answers against the catalog with reasons.
"""
