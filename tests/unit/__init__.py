"""
Unit Tests Package for the stack garage

Covers value objects, fee calculation, the occupancy stack, the garage
aggregate, DTOs and configuration.
"""
