"""
Product Update API.
"""
