"""
Configuration - environment driven settings and logging setup
"""
