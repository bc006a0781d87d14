"""
CLI module for Lumberlog
"""
