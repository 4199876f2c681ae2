"""
Order Management Service
"""
