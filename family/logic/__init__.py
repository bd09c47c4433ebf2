"""Core business logic layer.

Subpackages:
- session: family member and admin sessions
- reporting: admin dashboard statistics and chart data
"""
__all__ = ["session", "reporting"]
