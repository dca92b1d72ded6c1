"""
Docker Compose stack management for the E2E suite.

The suite shares one database across scenarios, so a run owns exactly one
stack and tests execute serially against it.
"""
