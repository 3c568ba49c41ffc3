"""
Integration tests for the retry orchestrator.

Test components together:
- Concurrent runs on independent executors (threads)
- Cross-thread cancellation of a backoff wait
- Retrying HTTP fetch against a respx-mocked service
"""
