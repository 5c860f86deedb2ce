"""Lunch planner: ingredients, meals, daily plans and shopping lists."""

__version__ = "1.0.0"
