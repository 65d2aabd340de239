"""
Request and response schemas for the fee engine.
"""
