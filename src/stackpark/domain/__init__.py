"""Domain layer: value objects, occupancy stack and the garage aggregate"""
