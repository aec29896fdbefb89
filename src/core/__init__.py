"""
Core domain models and mathematical primitives.

This module contains the foundational building blocks that the primality
tester is built on: the overflow-safe modular arithmetic kernel and the
verdict model.
"""
