"""Test package for LangGraph Chat.

Structure:
    - unit/: Session protocol, config and UI session state in isolation
    - integration/: API and chat page helpers driven end to end

The LangGraph server is replaced by the scripted client in fakes.py.
Leverages pytest with pytest-check for soft assertions.
"""
