"""Infrastructure layer - adapters for external services"""
