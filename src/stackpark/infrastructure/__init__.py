"""Infrastructure layer: in-process messaging"""
