"""
SQLAlchemy models package
"""
