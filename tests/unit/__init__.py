"""
Unit tests for the retry orchestrator.

Test individual components in isolation:
- Models (outcome/attempt invariants, status rules)
- Error mapping (ordering, shadowing, loading)
- Classifier (status codes, raw errors, escape hatch)
- Attempt tracker and retry policy
- Retry executor (terminal states, counts, cancellation)
- HTTP fetch helper and CLI
"""
