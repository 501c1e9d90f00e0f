"""
Core validation engine: models, field validators and the schema rule engine.
"""
