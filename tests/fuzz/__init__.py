"""Fuzz testing infrastructure for jsontranslate.

This package contains:
- shadow_store: Simple reference implementation for differential testing
- test_record_oracle: State machine fuzzer comparing records with the shadow
- test_interpolation_fuzz: Arbitrary templates and parameters

Python 3.13+.
"""
