"""
Integration Tests Package for the stack garage

Integration tests focus on:
1. Aggregate, service and event bus working together
2. End-to-end garage sessions
3. The application entry point
"""
