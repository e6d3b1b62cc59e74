"""
Backend Module

HTTP endpoint through which every generation call reaches the model provider.
"""
