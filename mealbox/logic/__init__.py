"""Core business logic layer.

Subpackages:
- scoring: dish scores, hard exclusions and match reasons
- box: weekly box assembly, plan projection and swaps
- planning: plan sessions and schedule commits
"""
__all__ = ["scoring", "box", "planning"]
