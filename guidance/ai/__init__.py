"""
Recommendation writing: generative provider with a rule-based fallback.
"""
