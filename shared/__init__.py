"""
Shared Kernel

This module contains value objects and utilities shared across the hotel,
booking and payment contexts.
"""
