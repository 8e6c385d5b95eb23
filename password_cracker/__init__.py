"""
Parallel dictionary attack against salted password hashes.
"""

__version__ = "0.1.0"
