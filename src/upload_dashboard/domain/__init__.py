"""Domain layer - models, interfaces and exceptions"""
