"""
NanoCamo - CLI Package
"""
