"""Unit tests for individual components in isolation.

Coverage:
    - service/: Config, client factory, threads, relay filtering, orchestration
    - ui/: ChatSession state and failure handling
"""
