from threes.networks.pattern import Pattern

__all__ = ["Pattern"]
