"""Application layer: DTOs and the garage use-case service"""
