"""
Map Invariants

Property-based checks for the guarantees every Map keeps regardless of the
keys and values it holds: distinct keys stay distinct, insertion order is
stable, and a rejected write never changes state.
"""
