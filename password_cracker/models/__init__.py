"""
Models for the password cracker.
"""
