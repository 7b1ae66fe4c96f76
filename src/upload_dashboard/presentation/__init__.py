"""Presentation layer - Streamlit dashboard"""
